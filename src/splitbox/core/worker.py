"""Worker side of the execution boundary.

``handle_request`` is the only function that runs inside the execution
context.  It takes a request message, runs the preparer then the chunker,
and always answers with exactly one response message.
"""

from __future__ import annotations

from typing import Any

import jsonschema

from splitbox.contracts.load import validate_instance
from splitbox.core.chunker import split_prepared_items
from splitbox.core.config import PreparationConfig
from splitbox.core.preparer import prepare_items
from splitbox.model.request import SplitRequest

REQUEST_SCHEMA = "split_request.schema.json"
RESPONSE_SCHEMA = "split_response.schema.json"


def run_request(request: SplitRequest) -> dict[str, Any]:
    """Prepare and split *request*; exceptions propagate to the caller."""
    prepared = prepare_items(
        request.raw_input,
        PreparationConfig(
            delimiter=request.delimiter,
            dedupe_mode=request.dedupe_mode,
            validation_mode=request.validation_mode,
            custom_pattern=request.custom_pattern,
        ),
    )
    groups = split_prepared_items(prepared.items, request.split_mode, request.split_value)
    return {
        "groups": [g.to_dict() for g in groups],
        "stats": prepared.stats.to_dict(),
    }


def handle_request(message: dict[str, Any]) -> dict[str, Any]:
    """Answer one request message with ``{groups, stats}`` or ``{error}``."""
    try:
        validate_instance(message, REQUEST_SCHEMA)
        return run_request(SplitRequest.from_message(message))
    except jsonschema.ValidationError as exc:
        return {"error": f"malformed request: {exc.message}"}
    except Exception as exc:
        return {"error": str(exc) or type(exc).__name__}
