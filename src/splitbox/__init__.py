"""splitbox — prepare delimited item lists and split them into batches."""

__all__ = [
    "__version__",
    "ConfigError",
    "ExecutionError",
    "ExecutionHost",
    "SplitOutcome",
    "SplitRequest",
    "format_batch_content",
    "parse_items",
    "prepare_items",
    "split_items",
    "split_prepared_items",
    "split_text",
    "template_file_extension",
]
__version__ = "0.1.0"

# Programmatic entrypoints, see splitbox.api.
from splitbox.api import (  # noqa: E402, F401
    parse_items,
    prepare_items,
    split_items,
    split_prepared_items,
    split_text,
    template_file_extension,
)
from splitbox.core.host import ExecutionHost  # noqa: E402, F401
from splitbox.errors import ConfigError, ExecutionError  # noqa: E402, F401
from splitbox.model.request import SplitOutcome, SplitRequest  # noqa: E402, F401
from splitbox.reports.formatter import format_batch_content  # noqa: E402, F401
