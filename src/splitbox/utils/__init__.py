"""Shared utilities for splitbox."""

from splitbox.utils.determinism import (
    FIXED_TIMESTAMP,
    deterministic_timestamp,
    epoch_millis,
    is_ci_mode,
)
from splitbox.utils.exit_codes import ExitCode
from splitbox.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = [
    "FIXED_TIMESTAMP",
    "deterministic_timestamp",
    "epoch_millis",
    "is_ci_mode",
    "ExitCode",
    "stable_json_dump",
    "stable_json_dumps",
]
