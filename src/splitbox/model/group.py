"""Group — one contiguous batch of prepared tokens."""

from __future__ import annotations

from dataclasses import dataclass


def group_label(index: int, count: int) -> str:
    """Human-readable label combining 1-based position and item count."""
    noun = "item" if count == 1 else "items"
    return f"Batch {index + 1} ({count} {noun})"


@dataclass(frozen=True, slots=True)
class Group:
    """Immutable batch produced by the chunker."""

    index: int
    items: tuple[str, ...]
    label: str

    @classmethod
    def build(cls, index: int, items: list[str] | tuple[str, ...]) -> "Group":
        chunk = tuple(items)
        return cls(index=index, items=chunk, label=group_label(index, len(chunk)))

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "items": list(self.items),
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Group":
        return cls(
            index=int(data["index"]),
            items=tuple(data["items"]),
            label=str(data["label"]),
        )
