"""Canonical JSON serialization — single dump path for CLI output and manifests.

Guarantees:
  - Stable key ordering (``sort_keys=True``)
  - Trailing newline at EOF
  - Non-ASCII text kept literal (``ensure_ascii=False``)
  - Enums → their values, ``Path`` → POSIX strings
  - Objects exposing ``to_dict()`` and plain dataclasses → dicts
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Any, Mapping


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None or isinstance(obj, (bool, int, float)):
        return obj
    if isinstance(obj, Enum):
        return _to_builtin(obj.value)
    if isinstance(obj, str):
        return obj
    if isinstance(obj, Path):
        return obj.as_posix()
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return _to_builtin(to_dict())
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_builtin(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    # Fall back to string (keeps CLI resilient)
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2, sort_keys: bool = True) -> str:
    """Serialize *obj* canonically, always ending with a newline."""
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
    )
    return s + "\n"


def stable_json_dump(
    obj: Any,
    fp: IO[str],
    *,
    indent: int | None = 2,
    sort_keys: bool = True,
) -> None:
    fp.write(stable_json_dumps(obj, indent=indent, sort_keys=sort_keys))
