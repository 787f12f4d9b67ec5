"""Output rendering: batch formatter and multi-file export."""

from splitbox.reports.formatter import format_batch_content, template_file_extension
from splitbox.reports.archive import build_archive, build_manifest, write_archive, write_batch_files

__all__ = [
    "format_batch_content",
    "template_file_extension",
    "build_archive",
    "build_manifest",
    "write_archive",
    "write_batch_files",
]
