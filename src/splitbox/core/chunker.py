"""Chunker — partitions a prepared token list into ordered groups.

Every strategy preserves item order and covers the full input: joining
the groups' items in index order gives back the input exactly.
"""

from __future__ import annotations

from typing import Callable, Sequence

from splitbox.core.config import PreparationConfig, SplitConfig
from splitbox.core.preparer import prepare_items
from splitbox.model import DelimiterMode, SplitMode
from splitbox.model.group import Group


def _by_items_per_group(items: Sequence[str], size: int) -> list[list[str]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def _by_target_group_count(items: Sequence[str], target: int) -> list[list[str]]:
    n = len(items)
    group_count = min(target, n)
    if group_count == 0:
        return []

    base, extra = divmod(n, group_count)
    chunks: list[list[str]] = []
    start = 0
    for i in range(group_count):
        size = base + (1 if i < extra else 0)
        chunks.append(list(items[start:start + size]))
        start += size
    return chunks


def _by_max_chars_per_group(items: Sequence[str], max_chars: int) -> list[list[str]]:
    chunks: list[list[str]] = []
    current: list[str] = []
    current_len = 0

    for item in items:
        separator = 1 if current else 0
        if current and current_len + separator + len(item) > max_chars:
            chunks.append(current)
            current, current_len, separator = [], 0, 0
        # An oversized item still lands here, alone in its own group.
        current.append(item)
        current_len += separator + len(item)

    if current:
        chunks.append(current)
    return chunks


_STRATEGIES: dict[SplitMode, Callable[[Sequence[str], int], list[list[str]]]] = {
    SplitMode.ITEMS_PER_GROUP: _by_items_per_group,
    SplitMode.TARGET_GROUP_COUNT: _by_target_group_count,
    SplitMode.MAX_CHARS_PER_GROUP: _by_max_chars_per_group,
}


def chunk(items: Sequence[str], config: SplitConfig) -> list[Group]:
    """Split *items* under an already-validated *config*."""
    strategy = _STRATEGIES[config.mode]
    return [Group.build(i, part) for i, part in enumerate(strategy(items, config.value))]


def split_prepared_items(
    items: Sequence[str],
    mode: SplitMode | str,
    value: int,
) -> list[Group]:
    """Partition *items* into groups.

    Raises ``ConfigError`` when *mode* is unknown or *value* is not a
    positive integer, before any group is built.
    """
    return chunk(items, SplitConfig(mode=mode, value=value))


def split_items(
    raw_input: str,
    config: SplitConfig,
    *,
    delimiter: DelimiterMode | str = DelimiterMode.NEWLINE,
) -> list[Group]:
    """Tokenize *raw_input* (no validation, no dedupe) and split it."""
    prepared = prepare_items(raw_input, PreparationConfig(delimiter=delimiter))
    return chunk(prepared.items, config)
