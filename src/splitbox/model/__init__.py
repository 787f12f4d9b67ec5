"""Enums shared across the preparation, chunking and output layers."""

from __future__ import annotations

from enum import Enum


class DelimiterMode(str, Enum):
    """How raw input is cut into tokens."""

    NEWLINE = "newline"
    COMMA = "comma"
    TAB = "tab"
    AUTO = "auto"


class DedupeMode(str, Enum):
    """Which key detects repeated tokens."""

    NONE = "none"
    CASE_SENSITIVE = "case_sensitive"
    CASE_INSENSITIVE = "case_insensitive"


class ValidationMode(str, Enum):
    """Pattern every surviving token must match."""

    NONE = "none"
    ALPHANUMERIC = "alphanumeric"
    EMAIL = "email"
    CUSTOM_REGEX = "custom_regex"


class SplitMode(str, Enum):
    """Sizing strategy for batches."""

    ITEMS_PER_GROUP = "items_per_group"
    TARGET_GROUP_COUNT = "target_group_count"
    MAX_CHARS_PER_GROUP = "max_chars_per_group"


class OutputTemplate(str, Enum):
    """Encoding used when a batch is rendered to text."""

    PLAIN = "plain"
    SQL_IN = "sql_in"
    QUOTED_CSV = "quoted_csv"
    JSON_ARRAY = "json_array"


class OutputDelimiter(str, Enum):
    """Join delimiter for the plain template."""

    NEWLINE = "newline"
    COMMA = "comma"
    TAB = "tab"


class RequestState(str, Enum):
    """Lifecycle of a request handed to the execution host."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
