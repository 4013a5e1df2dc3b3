"""Tests for sangria.printer: cursor, guides, sandbox and single-line attempts."""

from __future__ import annotations

import pytest

from sangria.config import StyleConfig
from sangria.errors import UnhandledNodeError
from sangria.location import SourceSpan
from sangria.nodes import Lit, NodeKind, Var
from sangria.printer import Printer
from sangria.style import Style, StyleBuilder

LOC = SourceSpan(1, 1)


def _printer(max_columns: int = 80, **kwargs) -> Printer:  # type: ignore[no-untyped-def]
    style = Style(name="bare", default_config=StyleConfig(max_columns=max_columns, **kwargs))
    return Printer(style)


class TestCursor:
    """write / newline / get_column / get_line."""

    def test_write_advances_column(self) -> None:
        p = _printer()
        p.write("main")
        p.write(" =")
        assert p.get_column() == 6
        assert p.get_line() == 1
        assert p.state.text == "main ="

    def test_newline_resets_to_zero_without_guides(self) -> None:
        p = _printer()
        p.write("abc")
        p.newline()
        assert p.get_column() == 0
        assert p.get_line() == 2

    def test_newline_resumes_at_active_guide(self) -> None:
        p = _printer()
        p.write("x")
        with p.indented(4):
            p.newline()
            assert p.get_column() == 4
            p.write("y")
        assert p.state.text == "x\n    y"

    def test_write_rejects_line_breaks(self) -> None:
        p = _printer()
        with pytest.raises(ValueError, match="line break"):
            p.write("a\nb")

    def test_empty_write_does_not_indent(self) -> None:
        p = _printer()
        with p.indented(2):
            p.newline()
            p.write("")
            p.newline()
        assert p.state.text == "\n\n"

    def test_blank_lines_are_empty_by_default(self) -> None:
        p = _printer()
        p.write("a")
        with p.indented(4):
            p.newline()
            p.newline()
            p.write("x")
        assert p.state.text == "a\n\n    x"

    def test_blank_lines_padded_when_not_cleared(self) -> None:
        p = _printer(clear_empty_lines=False)
        p.write("a")
        with p.indented(4):
            p.newline()
            p.newline()
            p.write("x")
        assert p.state.text == "a\n    \n    x"


class TestEndOfLineComments:
    """A written comment forces the next write onto a new line."""

    def test_next_write_breaks_line(self) -> None:
        p = _printer()
        p.write("x :: Int")
        p.write_comment("the x")
        p.write("}")
        assert p.state.text == "x :: Int -- the x\n}"

    def test_explicit_newline_clears_pending_comment(self) -> None:
        p = _printer()
        p.write_comment("note")
        p.newline()
        p.write("y")
        assert p.state.text == " -- note\ny"
        assert p.state.eol_comment is False


class TestGuides:
    """indented / with_indent / column / hanging."""

    def test_indented_is_relative_to_active_guide(self) -> None:
        p = _printer()
        with p.indented(2), p.indented(3):
            assert p.state.indent_level == 5

    def test_with_indent_is_relative_to_cursor(self) -> None:
        p = _printer()
        p.write("data X ")
        with p.with_indent():
            p.write("= A")
            p.newline()
            p.write("| B")
        assert p.state.text == "data X = A\n       | B"

    def test_with_indent_offset(self) -> None:
        p = _printer()
        p.write("ab")
        with p.with_indent(3):
            assert p.state.indent_level == 5

    def test_column_is_absolute(self) -> None:
        p = _printer()
        p.write("some text")
        with p.indented(8), p.column(1):
            p.newline()
            p.write("z")
        assert p.state.text.endswith("\n z")

    def test_column_clamps_negative(self) -> None:
        p = _printer()
        with p.column(-3):
            assert p.state.indent_level == 0

    def test_hanging_aligns_under_text_after_prefix(self) -> None:
        p = _printer()
        with p.hanging("let "):
            p.write("a = 1")
            p.newline()
            p.write("b = 2")
        assert p.state.text == "let a = 1\n    b = 2"

    def test_guides_pop_on_exception(self) -> None:
        p = _printer()
        with pytest.raises(RuntimeError), p.indented(2), p.with_indent(4):
            raise RuntimeError("boom")
        assert p.state.guides == []

    def test_nested_scopes_restore_depth(self) -> None:
        p = _printer()
        with p.indented(2):
            depth = len(p.state.guides)
            with p.column(10), p.hanging("where "):
                pass
            assert len(p.state.guides) == depth
        assert p.state.guides == []


class TestSandbox:
    """Measurement-only renders leave the live state alone."""

    def test_live_state_untouched(self) -> None:
        p = _printer()
        p.write("prefix")

        def body() -> int:
            p.write(" measured")
            p.newline()
            return p.get_line()

        line, scratch = p.sandbox(body)
        assert line == 2
        assert scratch.text == " measured\n"
        assert p.state.text == "prefix"
        assert p.get_column() == 6
        assert p.get_line() == 1

    def test_sandbox_restores_state_on_exception(self) -> None:
        p = _printer()
        original = p.state

        def body() -> None:
            raise KeyError("inner")

        with pytest.raises(KeyError):
            p.sandbox(body)
        assert p.state is original

    def test_sandbox_never_overflows(self) -> None:
        p = _printer(max_columns=3)

        def body() -> int:
            p.write("much longer than three")
            return p.get_column()

        width, _ = p.sandbox(body)
        assert width == len("much longer than three")


class TestAttemptSingleLine:
    """Compact-or-expanded choice keyed on the column limit."""

    def test_keeps_compact_when_it_fits(self) -> None:
        p = _printer(max_columns=10)
        result = p.attempt_single_line(
            lambda: p.write("short") or "compact",
            lambda: p.write("EXPANDED") or "expanded",
        )
        assert result == "compact"
        assert p.state.text == "short"

    def test_limit_is_inclusive(self) -> None:
        p = _printer(max_columns=5)
        p.attempt_single_line(lambda: p.write("12345"), lambda: p.write("x"))
        assert p.state.text == "12345"

    def test_overflow_leaves_no_trace(self) -> None:
        p = _printer(max_columns=10)
        p.write("f =")
        result = p.attempt_single_line(
            lambda: p.write(" this is far too long") or "compact",
            lambda: p.write(" ok") or "expanded",
        )
        assert result == "expanded"
        assert p.state.text == "f = ok"

    def test_rejected_compact_matches_expanded_alone(self) -> None:
        def expanded(p: Printer) -> None:
            p.newline()
            with p.indented(2):
                p.write("body")

        rolled_back = _printer(max_columns=8)
        rolled_back.write("head")
        with rolled_back.indented(6):
            rolled_back.attempt_single_line(
                lambda: rolled_back.write(" body that overflows"),
                lambda: expanded(rolled_back),
            )

        direct = _printer(max_columns=8)
        direct.write("head")
        with direct.indented(6):
            expanded(direct)

        assert rolled_back.state.text == direct.state.text
        assert rolled_back.state.line == direct.state.line
        assert rolled_back.state.column == direct.state.column
        assert rolled_back.state.guides == direct.state.guides

    def test_every_line_is_checked(self) -> None:
        p = _printer(max_columns=10)

        def compact() -> str:
            p.write("a line that is long")
            p.newline()
            p.write("ok")
            return "compact"

        assert p.attempt_single_line(compact, lambda: "expanded") == "expanded"
        assert p.state.text == ""

    def test_guides_restored_after_rollback(self) -> None:
        p = _printer(max_columns=4)

        def compact() -> None:
            with p.indented(2):
                p.write("overflowing")

        p.attempt_single_line(compact, lambda: None)
        assert p.state.guides == []

    def test_inner_rejection_stays_inside_outer_attempt(self) -> None:
        p = _printer(max_columns=12)

        def inner() -> None:
            p.attempt_single_line(
                lambda: p.write("much too long for the line"),
                lambda: p.write("b"),
            )

        def outer() -> str:
            p.write("a ")
            inner()
            return "outer compact"

        assert p.attempt_single_line(outer, lambda: "outer expanded") == "outer compact"
        assert p.state.text == "a b"

    def test_other_exceptions_propagate(self) -> None:
        p = _printer()

        def compact() -> None:
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            p.attempt_single_line(compact, lambda: None)
        assert p.state.trial is False


class TestDispatch:
    """Extender lookup with fallback to the structural defaults."""

    def test_extender_used_for_its_kind(self) -> None:
        builder = StyleBuilder("shouty")

        @builder.extends(NodeKind.EXP)
        def render_exp(p: Printer, node: Var | Lit) -> None:
            match node:
                case Var():
                    p.write(node.name.upper())
                case _:
                    p.pretty_default(node)

        p = Printer(builder.build())
        p.pretty(Var(LOC, "main"))
        p.space()
        p.pretty(Lit(LOC, "42"))
        assert p.state.text == "MAIN 42"

    def test_pretty_default_bypasses_extender(self) -> None:
        builder = StyleBuilder("shouty")
        builder.register(NodeKind.EXP, lambda p, node: p.write("!"))
        p = Printer(builder.build())
        p.pretty_default(Var(LOC, "x"))
        assert p.state.text == "x"

    def test_non_node_is_unhandled(self) -> None:
        p = _printer()
        with pytest.raises(UnhandledNodeError, match="not a syntax node"):
            p.pretty("x")  # type: ignore[arg-type]

    def test_custom_state_copied_per_render(self) -> None:
        builder = StyleBuilder("counting", initial_state={"vars": 0})

        @builder.extends(NodeKind.EXP)
        def count_vars(p: Printer, node: Var) -> None:
            p.state.custom["vars"] += 1
            p.pretty_default(node)

        style = builder.build()
        p = Printer(style)
        p.pretty(Var(LOC, "a"))
        p.sandbox(lambda: p.pretty(Var(LOC, "b")))
        assert p.state.custom == {"vars": 1}
        assert style.initial_state == {"vars": 0}


class TestCombinators:
    def test_inter_mixes_strings_and_nodes(self) -> None:
        p = _printer()
        p.inter(", ", ["a", Var(LOC, "b"), Lit(LOC, "3")])
        assert p.state.text == "a, b, 3"

    def test_lined(self) -> None:
        p = _printer()
        with p.indented(2):
            p.lined([Var(LOC, "a"), Var(LOC, "b")])
        assert p.state.text == "a\n  b"

    def test_parens_and_brackets(self) -> None:
        p = _printer()
        with p.parens(), p.brackets():
            p.write("x")
        assert p.state.text == "([x])"
