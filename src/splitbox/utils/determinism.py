"""Determinism utilities for reproducible export artifacts.

When --ci / --deterministic mode is enabled:
- Timestamps are fixed to a known epoch
- Archive names drop their wall-clock suffix

This keeps manifests and archives byte-identical across runs.
"""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def is_ci_mode(ci_mode: bool = False) -> bool:
    """Check if deterministic mode is enabled.

    Checks in order:
    1. Explicit *ci_mode*
    2. Environment variable SPLITBOX_DETERMINISTIC=1
    3. Environment variable CI_MODE=1
    """
    if ci_mode:
        return True
    if os.environ.get("SPLITBOX_DETERMINISTIC", "").lower() in ("1", "true", "yes"):
        return True
    return os.environ.get("CI_MODE", "").lower() in ("1", "true", "yes")


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Return FIXED_TIMESTAMP in CI mode, else the current UTC time (ISO 8601)."""
    if is_ci_mode(ci_mode):
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def epoch_millis(ci_mode: bool = False) -> int:
    """Milliseconds since the epoch; 0 in CI mode."""
    if is_ci_mode(ci_mode):
        return 0
    return int(time.time() * 1000)
