"""Error taxonomy for splitbox.

``ConfigError`` is raised synchronously by the preparer and chunker before
any partial result exists.  ``ExecutionError`` describes a failure of the
execution boundary itself (worker gone, timed out, malformed response).
"""

from __future__ import annotations


class SplitboxError(Exception):
    """Base class for all splitbox errors."""


class ConfigError(SplitboxError, ValueError):
    """Raised when a preparation or split configuration is invalid."""


class ExecutionError(SplitboxError, RuntimeError):
    """Raised when the execution context cannot deliver a usable outcome."""
