"""Load and validate message instances against the bundled schemas.

Usage::

    from splitbox.contracts.load import validate_instance, validate_file

    validate_instance(message, "split_request.schema.json")
    validate_file(Path("out/manifest.json"), "batch_manifest.schema.json")
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/splitbox/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("splitbox") / SCHEMA_DIR / name) as p:
        return p


def available_schemas() -> list[str]:
    """Names of every bundled schema, sorted."""
    root = Path(__file__).resolve().parents[1] / SCHEMA_DIR
    return sorted(p.name for p in root.glob("*.schema.json"))


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename.

    Raises ``FileNotFoundError`` if no such schema ships with the package.
    """
    path = _schema_path(name)
    if not path.exists():
        raise FileNotFoundError(f"schema not found: {name}")
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)


def is_valid_instance(instance: Any, schema_name: str) -> bool:
    """Boolean form of :func:`validate_instance`."""
    try:
        validate_instance(instance, schema_name)
    except jsonschema.ValidationError:
        return False
    return True


def validate_file(instance_path: Path, schema_name: str) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))
    validate_instance(instance, schema_name)
