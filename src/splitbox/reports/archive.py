"""Multi-file export — one file per batch plus a ``manifest.json``.

Two sinks share the same file set:

*  :func:`build_archive` / :func:`write_archive` — a single zip archive.
*  :func:`write_batch_files` — loose files in a directory.

The manifest records what was exported and validates against
``batch_manifest.schema.json``.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Any, Sequence

from splitbox.contracts.load import validate_instance
from splitbox.core.config import coerce_enum
from splitbox.model import OutputDelimiter, OutputTemplate
from splitbox.model.group import Group
from splitbox.reports.formatter import format_batch_content, template_file_extension
from splitbox.utils.determinism import deterministic_timestamp, epoch_millis
from splitbox.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"
MANIFEST_SCHEMA = "batch_manifest.schema.json"

# Fixed member timestamp so archive bytes depend only on their content.
_ZIP_DATE_TIME = (2000, 1, 1, 0, 0, 0)


def batch_filename(group: Group, template: OutputTemplate | str) -> str:
    """``batch-<n>.<ext>`` with a 1-based batch number."""
    return f"batch-{group.index + 1}.{template_file_extension(template)}"


def default_archive_name(*, ci_mode: bool = False) -> str:
    return f"splitbox-batches-{epoch_millis(ci_mode)}.zip"


def build_manifest(
    groups: Sequence[Group],
    template: OutputTemplate | str,
    delimiter: OutputDelimiter | str,
    *,
    ci_mode: bool = False,
) -> dict[str, Any]:
    """Describe an export of *groups*; validated before it is returned."""
    tpl = coerce_enum(OutputTemplate, template, name="template")
    delim = coerce_enum(OutputDelimiter, delimiter, name="output_delimiter")
    manifest = {
        "createdAt": deterministic_timestamp(ci_mode),
        "batchCount": len(groups),
        "totalItems": sum(len(g.items) for g in groups),
        "template": tpl.value,
        "delimiter": delim.value,
        "entries": [
            {
                "batch": g.index + 1,
                "itemCount": len(g.items),
                "filename": batch_filename(g, tpl),
            }
            for g in groups
        ],
    }
    validate_instance(manifest, MANIFEST_SCHEMA)
    return manifest


def render_batch_files(
    groups: Sequence[Group],
    template: OutputTemplate | str,
    delimiter: OutputDelimiter | str,
    *,
    ci_mode: bool = False,
) -> list[tuple[str, str]]:
    """Return ``(filename, content)`` pairs, manifest last."""
    files = [
        (batch_filename(g, template), format_batch_content(g.items, template, delimiter))
        for g in groups
    ]
    manifest = build_manifest(groups, template, delimiter, ci_mode=ci_mode)
    files.append((MANIFEST_NAME, stable_json_dumps(manifest)))
    return files


def build_archive(
    groups: Sequence[Group],
    template: OutputTemplate | str,
    delimiter: OutputDelimiter | str,
    *,
    ci_mode: bool = False,
) -> bytes:
    """Zip every batch file plus the manifest into one in-memory archive."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in render_batch_files(groups, template, delimiter, ci_mode=ci_mode):
            info = zipfile.ZipInfo(name, date_time=_ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            zf.writestr(info, content.encode("utf-8"))
    return buf.getvalue()


def write_archive(
    path: Path,
    groups: Sequence[Group],
    template: OutputTemplate | str,
    delimiter: OutputDelimiter | str,
    *,
    ci_mode: bool = False,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(build_archive(groups, template, delimiter, ci_mode=ci_mode))
    _logger.info("wrote %d batch(es) to %s", len(groups), path)
    return path


def write_batch_files(
    out_dir: Path,
    groups: Sequence[Group],
    template: OutputTemplate | str,
    delimiter: OutputDelimiter | str,
    *,
    ci_mode: bool = False,
) -> list[Path]:
    """Write each batch and the manifest into *out_dir*; returns written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, content in render_batch_files(groups, template, delimiter, ci_mode=ci_mode):
        target = out_dir / name
        target.write_text(content, encoding="utf-8", newline="")
        written.append(target)
    _logger.info("wrote %d batch(es) to %s", len(groups), out_dir)
    return written
