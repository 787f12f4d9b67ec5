"""Validation matchers — each ValidationMode resolves to a compiled pattern.

Patterns are compiled when a configuration is built so that a broken
custom pattern surfaces as a ``ConfigError`` before the token loop runs.
"""

from __future__ import annotations

import re

from splitbox.errors import ConfigError
from splitbox.model import ValidationMode

ALPHANUMERIC_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_BUILTIN_MATCHERS: dict[ValidationMode, re.Pattern[str]] = {
    ValidationMode.ALPHANUMERIC: ALPHANUMERIC_PATTERN,
    ValidationMode.EMAIL: EMAIL_PATTERN,
}


def build_matcher(
    mode: ValidationMode,
    custom_pattern: str | None = None,
) -> re.Pattern[str] | None:
    """Return the compiled matcher for *mode*, or ``None`` for ``none``.

    Raises
    ------
    ConfigError
        If *mode* is ``custom_regex`` and *custom_pattern* is missing,
        blank, or not a valid regular expression.
    """
    if mode is ValidationMode.NONE:
        return None
    if mode is ValidationMode.CUSTOM_REGEX:
        if custom_pattern is None or not custom_pattern.strip():
            raise ConfigError(
                "custom_pattern is required when validation_mode is custom_regex"
            )
        try:
            return re.compile(custom_pattern)
        except re.error as exc:
            raise ConfigError(
                f"custom_pattern is not a valid regular expression: {exc}"
            ) from exc
    return _BUILTIN_MATCHERS[mode]


def is_valid(matcher: re.Pattern[str] | None, token: str) -> bool:
    """Apply *matcher* to *token*; ``None`` accepts everything."""
    if matcher is None:
        return True
    return matcher.search(token) is not None
