"""Preparer — raw text → cleaned, validated, deduplicated token list.

Pipeline (each step feeds the next):

1. tokenize    split on the delimiter rule
2. trim        strip whitespace, drop empties
3. validate    drop tokens failing the matcher (first 5 kept as examples)
4. dedupe      keep the first occurrence of every dedupe key
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from splitbox.core.config import PreparationConfig, coerce_enum
from splitbox.core.validation import is_valid
from splitbox.model import DedupeMode, DelimiterMode
from splitbox.model.prepared import (
    MAX_INVALID_EXAMPLES,
    PreparationStats,
    PreparedItems,
)

_logger = logging.getLogger(__name__)

# One split point per separator occurrence; "\r\n" counts as a single break.
_NEWLINE_SPLIT = re.compile(r"\r\n|[\r\n]")
_COMMA_SPLIT = re.compile(r"\r\n|[\r\n,]")
_TAB_SPLIT = re.compile(r"\r\n|[\r\n\t]")
_ANY_SPLIT = re.compile(r"\r\n|[\r\n,\t]")

_AUTO_MARKERS = ("\n", "\t", ",")


def _splitter_for(raw_input: str, delimiter: DelimiterMode) -> re.Pattern[str]:
    if delimiter is DelimiterMode.NEWLINE:
        return _NEWLINE_SPLIT
    if delimiter is DelimiterMode.COMMA:
        return _COMMA_SPLIT
    if delimiter is DelimiterMode.TAB:
        return _TAB_SPLIT
    # auto: plain newline split unless a separator character is present.
    if not any(marker in raw_input for marker in _AUTO_MARKERS):
        return _NEWLINE_SPLIT
    return _ANY_SPLIT


def tokenize(raw_input: str, delimiter: DelimiterMode | str) -> list[str]:
    """Split *raw_input* into untrimmed tokens according to *delimiter*."""
    mode = coerce_enum(DelimiterMode, delimiter, name="delimiter")
    return _splitter_for(raw_input, mode).split(raw_input)


def parse_items(raw_input: str, delimiter: DelimiterMode | str = DelimiterMode.NEWLINE) -> list[str]:
    """Tokenize and trim, dropping empty tokens. No validation or dedupe."""
    trimmed = (token.strip() for token in tokenize(raw_input, delimiter))
    return [token for token in trimmed if token]


def _dedupe_key(token: str, mode: DedupeMode) -> str:
    if mode is DedupeMode.CASE_INSENSITIVE:
        return token.lower()
    return token


def prepare_items(
    raw_input: str,
    config: PreparationConfig | Mapping[str, Any] | None = None,
) -> PreparedItems:
    """Run the full preparation pipeline over *raw_input*.

    *config* may be a :class:`PreparationConfig` or a mapping of its field
    names.  Building the config compiles the validation matcher, so a
    missing or broken custom pattern raises ``ConfigError`` here before
    any token is examined.
    """
    if config is None:
        config = PreparationConfig()
    elif not isinstance(config, PreparationConfig):
        config = PreparationConfig.from_mapping(config)

    # ── 1. tokenize ─────────────────────────────────────────────────
    raw_tokens = tokenize(raw_input, config.delimiter)

    # ── 2. trim & drop empties ──────────────────────────────────────
    tokens: list[str] = []
    empty_removed = 0
    for token in raw_tokens:
        token = token.strip()
        if token:
            tokens.append(token)
        else:
            empty_removed += 1

    # ── 3. validate ─────────────────────────────────────────────────
    invalid_removed = 0
    invalid_examples: list[str] = []
    if config.matcher is not None:
        valid: list[str] = []
        for token in tokens:
            if is_valid(config.matcher, token):
                valid.append(token)
                continue
            invalid_removed += 1
            if len(invalid_examples) < MAX_INVALID_EXAMPLES:
                invalid_examples.append(token)
        tokens = valid

    # ── 4. dedupe ───────────────────────────────────────────────────
    duplicates_removed = 0
    if config.dedupe_mode is not DedupeMode.NONE:
        seen: set[str] = set()
        unique: list[str] = []
        for token in tokens:
            key = _dedupe_key(token, config.dedupe_mode)
            if key in seen:
                duplicates_removed += 1
                continue
            seen.add(key)
            unique.append(token)
        tokens = unique

    stats = PreparationStats(
        raw_token_count=len(raw_tokens),
        empty_removed=empty_removed,
        invalid_removed=invalid_removed,
        duplicates_removed=duplicates_removed,
        invalid_examples=tuple(invalid_examples),
    )
    _logger.debug(
        "prepared %d item(s) from %d raw token(s): empty=%d invalid=%d duplicates=%d",
        len(tokens),
        stats.raw_token_count,
        empty_removed,
        invalid_removed,
        duplicates_removed,
    )
    return PreparedItems(items=tuple(tokens), stats=stats)
