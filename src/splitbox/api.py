"""
splitbox.api
============

Programmatic entrypoints for using splitbox as a library.

Goals:
  - No argparse / CLI dependencies
  - Stable, JSON-friendly outputs that match the bundled message schemas

Non-goals:
  - Owning presentation (preview, clipboard) — callers render results
  - Owning persistence — callers decide where exports go

Usage::

    from splitbox.api import split_text, render_groups

    outcome = split_text("a\\nb\\nc", split_mode="target_group_count", split_value=2)
    groups, stats = outcome.unwrap()
    texts = render_groups(groups, template="sql_in")
"""

from __future__ import annotations

from typing import Sequence

from splitbox.contracts.load import validate_instance
from splitbox.core.chunker import split_items, split_prepared_items
from splitbox.core.config import DEFAULT_MAX_INPUT_BYTES, check_input_size
from splitbox.core.host import ExecutionHost
from splitbox.core.preparer import parse_items, prepare_items
from splitbox.model import (
    DedupeMode,
    DelimiterMode,
    OutputDelimiter,
    OutputTemplate,
    SplitMode,
    ValidationMode,
)
from splitbox.model.group import Group
from splitbox.model.request import SplitOutcome, SplitRequest
from splitbox.reports.formatter import format_batch_content, template_file_extension

__all__ = [
    "build_request",
    "parse_items",
    "prepare_items",
    "render_groups",
    "split_items",
    "split_prepared_items",
    "split_text",
    "template_file_extension",
    "validate_instance",
]


def build_request(
    raw_input: str,
    *,
    delimiter: DelimiterMode | str = DelimiterMode.AUTO,
    dedupe_mode: DedupeMode | str = DedupeMode.NONE,
    validation_mode: ValidationMode | str = ValidationMode.NONE,
    custom_pattern: str | None = None,
    split_mode: SplitMode | str = SplitMode.ITEMS_PER_GROUP,
    split_value: int = 100,
    max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES,
) -> SplitRequest:
    """Build a :class:`SplitRequest`, rejecting unknown modes and oversized input.

    Raises
    ------
    ConfigError
        If a mode is not recognised or *raw_input* exceeds *max_input_bytes*.
    """
    check_input_size(raw_input, max_input_bytes)
    return SplitRequest(
        raw_input=raw_input,
        delimiter=delimiter,
        dedupe_mode=dedupe_mode,
        validation_mode=validation_mode,
        custom_pattern=custom_pattern,
        split_mode=split_mode,
        split_value=split_value,
    )


def split_text(
    raw_input: str,
    *,
    host: ExecutionHost | None = None,
    isolated: bool = True,
    **options,
) -> SplitOutcome:
    """Prepare and split *raw_input* through an :class:`ExecutionHost`.

    *options* are the keyword arguments of :func:`build_request`.  When no
    *host* is given a transient one is started and closed around the call.
    Configuration problems inside the worker come back as a failed
    outcome, never as an exception.
    """
    request = build_request(raw_input, **options)
    if host is not None:
        return host.run(request)
    with ExecutionHost(isolated=isolated) as transient:
        return transient.run(request)


def render_groups(
    groups: Sequence[Group],
    template: OutputTemplate | str = OutputTemplate.PLAIN,
    delimiter: OutputDelimiter | str = OutputDelimiter.NEWLINE,
) -> list[str]:
    """Render every group with the same template, in index order."""
    return [format_batch_content(g.items, template, delimiter) for g in groups]
