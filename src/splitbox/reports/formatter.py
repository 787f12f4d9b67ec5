"""Output formatter — renders a batch into its final text encoding.

Supports:

*  **plain** — items joined by newline, comma or tab.
*  **sql_in** — ``('a', 'b')`` with single quotes doubled.
*  **quoted_csv** — ``"a","b"`` with double quotes doubled.
*  **json_array** — pretty-printed JSON array (2-space indent).
"""

from __future__ import annotations

import json
from typing import Sequence

from splitbox.core.config import coerce_enum
from splitbox.model import OutputDelimiter, OutputTemplate

_JOIN_SEPARATOR = {
    OutputDelimiter.NEWLINE: "\n",
    OutputDelimiter.COMMA: ",",
    OutputDelimiter.TAB: "\t",
}

# One canonical extension per template; the formatter dispatch below
# covers the same keys.
TEMPLATE_EXTENSIONS = {
    OutputTemplate.PLAIN: "txt",
    OutputTemplate.SQL_IN: "sql",
    OutputTemplate.QUOTED_CSV: "csv",
    OutputTemplate.JSON_ARRAY: "json",
}


def escape_sql_value(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def escape_csv_value(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _format_plain(items: Sequence[str], delimiter: OutputDelimiter) -> str:
    return _JOIN_SEPARATOR[delimiter].join(items)


def _format_sql_in(items: Sequence[str], _delimiter: OutputDelimiter) -> str:
    return "(" + ", ".join(escape_sql_value(i) for i in items) + ")"


def _format_quoted_csv(items: Sequence[str], _delimiter: OutputDelimiter) -> str:
    return ",".join(escape_csv_value(i) for i in items)


def _format_json_array(items: Sequence[str], _delimiter: OutputDelimiter) -> str:
    return json.dumps(list(items), indent=2, ensure_ascii=False)


_FORMATTERS = {
    OutputTemplate.PLAIN: _format_plain,
    OutputTemplate.SQL_IN: _format_sql_in,
    OutputTemplate.QUOTED_CSV: _format_quoted_csv,
    OutputTemplate.JSON_ARRAY: _format_json_array,
}


def format_batch_content(
    items: Sequence[str],
    template: OutputTemplate | str = OutputTemplate.PLAIN,
    delimiter: OutputDelimiter | str = OutputDelimiter.NEWLINE,
) -> str:
    """Render *items* with *template*; *delimiter* only affects ``plain``."""
    tpl = coerce_enum(OutputTemplate, template, name="template")
    delim = coerce_enum(OutputDelimiter, delimiter, name="output_delimiter")
    return _FORMATTERS[tpl](items, delim)


def template_file_extension(template: OutputTemplate | str) -> str:
    """Return the file extension (without dot) for *template*."""
    return TEMPLATE_EXTENSIONS[coerce_enum(OutputTemplate, template, name="template")]
