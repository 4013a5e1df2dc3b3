"""Tests for sangria.location."""

import pytest

from sangria.location import SourceSpan


class TestSourceSpan:
    def test_str_is_line_and_column(self) -> None:
        assert str(SourceSpan(12, 4)) == "12:4"

    def test_last_line_defaults_to_start(self) -> None:
        assert SourceSpan(3, 1).last_line == 3
        assert SourceSpan(3, 1, end_lineno=6).last_line == 6

    def test_same_line_compares_starts(self) -> None:
        assert SourceSpan(2, 1, end_lineno=9).same_line(SourceSpan(2, 30))
        assert not SourceSpan(2, 1).same_line(SourceSpan(3, 1))

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            SourceSpan(1, 1).lineno = 2  # type: ignore[misc]
