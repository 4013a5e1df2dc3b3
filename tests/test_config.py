"""Tests for StyleConfig and ContextVar-scoped config overrides.

Validates field validation, merging, the scoped override and the order in
which pretty_print resolves its configuration.
"""

from threading import Thread

import pytest

from sangria import (
    StyleConfig,
    get_render_config,
    pretty_print,
    pretty_print_state,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from sangria.errors import ConfigError
from sangria.location import SourceSpan
from sangria.nodes import List, Lit

LOC = SourceSpan(1, 1)
NUMBERS = List(LOC, (Lit(LOC, "1"), Lit(LOC, "2"), Lit(LOC, "3")))
FLAT = "[1, 2, 3]"
TALL = "[ 1\n, 2\n, 3\n]"


class TestStyleConfigDataclass:
    """Test StyleConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = StyleConfig()
        assert config.max_columns == 80
        assert config.indent_spaces == 2
        assert config.clear_empty_lines is True
        assert dict(config.options) == {}

    def test_immutability(self) -> None:
        config = StyleConfig()
        with pytest.raises(AttributeError):
            config.max_columns = 10  # type: ignore[misc]

    def test_options_frozen(self) -> None:
        source = {"align": True}
        config = StyleConfig(options=source)
        source["align"] = False
        assert config.option("align") is True
        with pytest.raises(TypeError):
            config.options["align"] = False  # type: ignore[index]

    def test_option_default(self) -> None:
        assert StyleConfig().option("missing", 3) == 3

    @pytest.mark.parametrize(
        ("kwargs", "field_name"),
        [
            ({"max_columns": 0}, "max_columns"),
            ({"max_columns": -4}, "max_columns"),
            ({"max_columns": "80"}, "max_columns"),
            ({"max_columns": True}, "max_columns"),
            ({"indent_spaces": -1}, "indent_spaces"),
            ({"indent_spaces": 2.5}, "indent_spaces"),
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict, field_name: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            StyleConfig(**kwargs)
        assert exc_info.value.field_name == field_name
        assert isinstance(exc_info.value, ValueError)

    def test_zero_indent_allowed(self) -> None:
        assert StyleConfig(indent_spaces=0).indent_spaces == 0


class TestMerge:
    def test_overrides_fields(self) -> None:
        merged = StyleConfig(max_columns=100).merge({"indent_spaces": 4})
        assert merged.max_columns == 100
        assert merged.indent_spaces == 4

    def test_unknown_keys_ignored(self) -> None:
        config = StyleConfig()
        assert config.merge({"tabs": True}) is config

    def test_options_merge_key_by_key(self) -> None:
        config = StyleConfig(options={"a": 1, "b": 2})
        merged = config.merge({"options": {"b": 3}})
        assert dict(merged.options) == {"a": 1, "b": 3}

    def test_merge_validates(self) -> None:
        with pytest.raises(ConfigError):
            StyleConfig().merge({"max_columns": 0})


class TestDictForm:
    def test_from_dict_ignores_unknown(self) -> None:
        config = StyleConfig.from_dict({"max_columns": 120, "colour": "always"})
        assert config.max_columns == 120

    def test_round_trip(self) -> None:
        config = StyleConfig(max_columns=60, clear_empty_lines=False, options={"x": 1})
        assert StyleConfig.from_dict(config.to_dict()) == config


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_render_config()

    def test_no_override_by_default(self) -> None:
        assert get_render_config() is None

    def test_set_and_reset(self) -> None:
        config = StyleConfig(max_columns=40)
        set_render_config(config)
        assert get_render_config() is config
        reset_render_config()
        assert get_render_config() is None

    def test_context_manager_restores_previous(self) -> None:
        outer = StyleConfig(max_columns=90)
        set_render_config(outer)
        with render_config_context(StyleConfig(max_columns=30)):
            assert get_render_config().max_columns == 30
        assert get_render_config() is outer

    def test_context_manager_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError), render_config_context(StyleConfig(max_columns=30)):
            raise RuntimeError
        assert get_render_config() is None

    def test_thread_isolation(self) -> None:
        """An override set in one thread is invisible to another."""
        seen: list[StyleConfig | None] = []

        def worker() -> None:
            seen.append(get_render_config())

        with render_config_context(StyleConfig(max_columns=30)):
            thread = Thread(target=worker)
            thread.start()
            thread.join()
        assert seen == [None]


class TestResolution:
    """Explicit config beats the scoped override, which beats the style default."""

    def teardown_method(self) -> None:
        reset_render_config()

    def test_style_default(self) -> None:
        assert pretty_print(NUMBERS) == FLAT

    def test_scoped_override(self) -> None:
        with render_config_context(StyleConfig(max_columns=5)):
            assert pretty_print(NUMBERS) == TALL

    def test_explicit_config_beats_scope(self) -> None:
        with render_config_context(StyleConfig(max_columns=5)):
            assert pretty_print(NUMBERS, config=StyleConfig(max_columns=100)) == FLAT

    def test_keyword_overrides_apply_last(self) -> None:
        assert pretty_print(NUMBERS, config=StyleConfig(max_columns=100), max_columns=5) == TALL

    def test_state_reports_final_cursor(self) -> None:
        state = pretty_print_state(NUMBERS, max_columns=5)
        assert state.text == TALL
        assert state.line == 4
        assert state.column == 1
