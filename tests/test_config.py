"""Tests for option coercion, RunOptions presets and input limits."""

from __future__ import annotations

import pytest

from splitbox.core.config import (
    SplitConfig,
    check_input_size,
    coerce_enum,
    coerce_split_value,
    load_preset,
)
from splitbox.errors import ConfigError, SplitboxError
from splitbox.model import DelimiterMode, SplitMode


class TestCoercion:
    def test_enum_member_passes_through(self) -> None:
        assert coerce_enum(DelimiterMode, DelimiterMode.TAB, name="delimiter") is DelimiterMode.TAB

    def test_wire_value(self) -> None:
        assert coerce_enum(DelimiterMode, "comma", name="delimiter") is DelimiterMode.COMMA

    def test_unknown_value_lists_choices(self) -> None:
        with pytest.raises(ConfigError, match="newline, comma, tab, auto"):
            coerce_enum(DelimiterMode, "pipe", name="delimiter")

    @pytest.mark.parametrize("value, expected", [(1, 1), (250, 250), (4.0, 4)])
    def test_split_value_accepted(self, value, expected) -> None:
        assert coerce_split_value(value) == expected

    @pytest.mark.parametrize("value", [0, -1, 0.5, float("nan"), False, "2", None])
    def test_split_value_rejected(self, value) -> None:
        with pytest.raises(ConfigError, match="value must be a positive integer"):
            coerce_split_value(value)

    def test_split_config_defaults(self) -> None:
        config = SplitConfig()
        assert config.mode is SplitMode.ITEMS_PER_GROUP
        assert config.value == 100

    def test_config_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            SplitConfig(value=0)
        assert issubclass(ConfigError, SplitboxError)


class TestInputSize:
    def test_within_limit(self) -> None:
        check_input_size("abc", 3)

    def test_over_limit(self) -> None:
        with pytest.raises(ConfigError, match="larger than the 3-byte limit"):
            check_input_size("abcd", 3)


class TestLoadPreset:
    def test_mapping(self, tmp_path) -> None:
        p = tmp_path / "p.yaml"
        p.write_text("mode: max_chars_per_group\nvalue: 80\npattern: '^x'\n", encoding="utf-8")
        assert load_preset(p) == {"mode": "max_chars_per_group", "value": 80, "pattern": "^x"}

    def test_dashed_keys(self, tmp_path) -> None:
        p = tmp_path / "p.yaml"
        p.write_text("output-delimiter: tab\n", encoding="utf-8")
        assert load_preset(p) == {"output_delimiter": "tab"}

    def test_empty_file(self, tmp_path) -> None:
        p = tmp_path / "p.yaml"
        p.write_text("", encoding="utf-8")
        assert load_preset(p) == {}

    def test_not_a_mapping(self, tmp_path) -> None:
        p = tmp_path / "p.yaml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_preset(p)

    def test_invalid_yaml(self, tmp_path) -> None:
        p = tmp_path / "p.yaml"
        p.write_text("mode: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="not valid YAML"):
            load_preset(p)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="cannot read preset"):
            load_preset(tmp_path / "missing.yaml")

    def test_unknown_keys(self, tmp_path) -> None:
        p = tmp_path / "p.yaml"
        p.write_text("value: 2\nsize: 3\ncolour: red\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="unknown keys: colour, size"):
            load_preset(p)
