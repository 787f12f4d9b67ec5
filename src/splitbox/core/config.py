"""Preparation and split configuration dataclasses, plus YAML presets."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, TypeVar

import yaml

from splitbox.core.validation import build_matcher
from splitbox.errors import ConfigError
from splitbox.model import (
    DedupeMode,
    DelimiterMode,
    OutputDelimiter,
    OutputTemplate,
    SplitMode,
    ValidationMode,
)

E = TypeVar("E", bound=Enum)

# Hard ceiling on raw input; this is single-document, single-shot processing.
DEFAULT_MAX_INPUT_BYTES = 10 * 1024 * 1024


def coerce_enum(enum_cls: type[E], value: Any, *, name: str) -> E:
    """Accept an enum member or its wire value; raise ``ConfigError`` otherwise."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)  # type: ignore[attr-defined]
        raise ConfigError(
            f"{name} must be one of: {allowed} (got {value!r})"
        ) from None


def coerce_split_value(value: Any) -> int:
    """Return *value* as a positive ``int``.

    Integral floats (``2.0``) are accepted; bools, fractions, strings and
    anything below 1 raise ``ConfigError``.
    """
    if isinstance(value, bool):
        raise ConfigError("value must be a positive integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 1:
        raise ConfigError("value must be a positive integer")
    return value


def check_input_size(raw_input: str, max_bytes: int = DEFAULT_MAX_INPUT_BYTES) -> None:
    """Reject raw input larger than *max_bytes* once UTF-8 encoded."""
    size = len(raw_input.encode("utf-8"))
    if size > max_bytes:
        raise ConfigError(
            f"input is {size} bytes, larger than the {max_bytes}-byte limit"
        )


@dataclass(frozen=True)
class PreparationConfig:
    """Immutable preparation configuration.

    ``dedupe`` is the older boolean switch; it only applies when
    ``dedupe_mode`` is left unset.
    """

    delimiter: DelimiterMode = DelimiterMode.AUTO
    dedupe_mode: DedupeMode | None = None
    validation_mode: ValidationMode = ValidationMode.NONE
    custom_pattern: str | None = None
    dedupe: bool | None = None
    matcher: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "delimiter", coerce_enum(DelimiterMode, self.delimiter, name="delimiter")
        )
        if self.dedupe_mode is None:
            mode = DedupeMode.CASE_SENSITIVE if self.dedupe else DedupeMode.NONE
        else:
            mode = coerce_enum(DedupeMode, self.dedupe_mode, name="dedupe_mode")
        object.__setattr__(self, "dedupe_mode", mode)
        object.__setattr__(
            self,
            "validation_mode",
            coerce_enum(ValidationMode, self.validation_mode, name="validation_mode"),
        )
        object.__setattr__(
            self, "matcher", build_matcher(self.validation_mode, self.custom_pattern)
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PreparationConfig":
        known = {f.name for f in fields(cls) if f.init}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class SplitConfig:
    """Immutable split configuration: strategy plus its positive bound."""

    mode: SplitMode = SplitMode.ITEMS_PER_GROUP
    value: int = 100

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", coerce_enum(SplitMode, self.mode, name="split_mode"))
        object.__setattr__(self, "value", coerce_split_value(self.value))


@dataclass(frozen=True)
class RunOptions:
    """Every caller-facing option with its default.

    Used by the CLI and presets; field names double as preset keys.
    """

    delimiter: str = DelimiterMode.AUTO.value
    dedupe: str = DedupeMode.NONE.value
    validation: str = ValidationMode.NONE.value
    pattern: str | None = None
    mode: str = SplitMode.ITEMS_PER_GROUP.value
    value: int = 100
    template: str = OutputTemplate.PLAIN.value
    output_delimiter: str = OutputDelimiter.NEWLINE.value


def load_preset(path: Path | str) -> dict[str, Any]:
    """Load a YAML preset of :class:`RunOptions` keys.

    Unknown keys raise ``ConfigError`` so typos do not go unnoticed.
    """
    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read preset {p}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"preset {p} is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"preset {p} must contain a mapping")

    # YAML keys may use dashes like the CLI flags do.
    normalised = {str(k).replace("-", "_"): v for k, v in data.items()}
    known = {f.name for f in fields(RunOptions)}
    unknown = sorted(set(normalised) - known)
    if unknown:
        raise ConfigError(f"preset {p} has unknown keys: {', '.join(unknown)}")
    return normalised
