"""SplitRequest / SplitOutcome — the two messages of the execution boundary.

Only plain dicts travel between caller and worker; these dataclasses are
the typed views either side builds from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from splitbox.core.config import coerce_enum
from splitbox.errors import ExecutionError
from splitbox.model import (
    DedupeMode,
    DelimiterMode,
    RequestState,
    SplitMode,
    ValidationMode,
)
from splitbox.model.group import Group
from splitbox.model.prepared import PreparationStats


@dataclass(frozen=True, slots=True)
class SplitRequest:
    """Everything the worker needs to prepare and split one input."""

    raw_input: str
    delimiter: DelimiterMode = DelimiterMode.AUTO
    dedupe_mode: DedupeMode = DedupeMode.NONE
    validation_mode: ValidationMode = ValidationMode.NONE
    custom_pattern: str | None = None
    split_mode: SplitMode = SplitMode.ITEMS_PER_GROUP
    split_value: int = 100

    def __post_init__(self) -> None:
        object.__setattr__(self, "delimiter", coerce_enum(DelimiterMode, self.delimiter, name="delimiter"))
        object.__setattr__(self, "dedupe_mode", coerce_enum(DedupeMode, self.dedupe_mode, name="dedupe_mode"))
        object.__setattr__(
            self,
            "validation_mode",
            coerce_enum(ValidationMode, self.validation_mode, name="validation_mode"),
        )
        object.__setattr__(self, "split_mode", coerce_enum(SplitMode, self.split_mode, name="split_mode"))

    # ── serialisation ───────────────────────────────────────────────

    def to_message(self) -> dict[str, Any]:
        msg: dict[str, Any] = {
            "rawInput": self.raw_input,
            "delimiter": self.delimiter.value,
            "dedupeMode": self.dedupe_mode.value,
            "validationMode": self.validation_mode.value,
            "splitMode": self.split_mode.value,
            "splitValue": self.split_value,
        }
        if self.custom_pattern is not None:
            msg["customValidationPattern"] = self.custom_pattern
        return msg

    @classmethod
    def from_message(cls, msg: dict[str, Any]) -> "SplitRequest":
        return cls(
            raw_input=msg["rawInput"],
            delimiter=DelimiterMode(msg["delimiter"]),
            dedupe_mode=DedupeMode(msg["dedupeMode"]),
            validation_mode=ValidationMode(msg["validationMode"]),
            custom_pattern=msg.get("customValidationPattern"),
            split_mode=SplitMode(msg["splitMode"]),
            split_value=msg["splitValue"],
        )


@dataclass(frozen=True, slots=True)
class SplitOutcome:
    """Terminal outcome of one request: succeeded with data, or failed."""

    state: RequestState
    groups: tuple[Group, ...] = ()
    stats: PreparationStats | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is RequestState.SUCCEEDED

    @classmethod
    def succeeded(cls, groups: list[Group], stats: PreparationStats) -> "SplitOutcome":
        return cls(state=RequestState.SUCCEEDED, groups=tuple(groups), stats=stats)

    @classmethod
    def failed(cls, error: str) -> "SplitOutcome":
        return cls(state=RequestState.FAILED, error=error)

    @classmethod
    def from_message(cls, msg: dict[str, Any]) -> "SplitOutcome":
        """Build from a response message already checked against its schema."""
        if "error" in msg:
            return cls.failed(msg["error"])
        return cls.succeeded(
            [Group.from_dict(g) for g in msg["groups"]],
            PreparationStats.from_dict(msg["stats"]),
        )

    def unwrap(self) -> tuple[tuple[Group, ...], PreparationStats]:
        """Return ``(groups, stats)`` or raise ``ExecutionError``."""
        if not self.ok or self.stats is None:
            raise ExecutionError(self.error or "request did not succeed")
        return self.groups, self.stats

    def to_dict(self) -> dict[str, Any]:
        if not self.ok:
            return {"error": self.error or ""}
        return {
            "groups": [g.to_dict() for g in self.groups],
            "stats": self.stats.to_dict() if self.stats else PreparationStats().to_dict(),
        }

    @property
    def total_items(self) -> int:
        return sum(len(g.items) for g in self.groups)

