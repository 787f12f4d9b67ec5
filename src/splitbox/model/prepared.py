"""PreparedItems — the cleaned token list and its diagnostic counters."""

from __future__ import annotations

from dataclasses import dataclass, field

# Upper bound on rejected tokens echoed back to the caller.
MAX_INVALID_EXAMPLES = 5


@dataclass(frozen=True, slots=True)
class PreparationStats:
    """Counters produced once per preparation run."""

    raw_token_count: int = 0
    empty_removed: int = 0
    invalid_removed: int = 0
    duplicates_removed: int = 0
    invalid_examples: tuple[str, ...] = ()

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "rawTokenCount": self.raw_token_count,
            "emptyRemoved": self.empty_removed,
            "invalidRemoved": self.invalid_removed,
            "duplicatesRemoved": self.duplicates_removed,
            "invalidExamples": list(self.invalid_examples),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PreparationStats":
        return cls(
            raw_token_count=int(data["rawTokenCount"]),
            empty_removed=int(data["emptyRemoved"]),
            invalid_removed=int(data["invalidRemoved"]),
            duplicates_removed=int(data["duplicatesRemoved"]),
            invalid_examples=tuple(data.get("invalidExamples", ())),
        )


@dataclass(frozen=True, slots=True)
class PreparedItems:
    """Unique, valid tokens in first-occurrence order.

    ``len(items)`` always equals ``raw_token_count`` minus the three
    removal counters.
    """

    items: tuple[str, ...] = ()
    stats: PreparationStats = field(default_factory=PreparationStats)

    def __len__(self) -> int:
        return len(self.items)
