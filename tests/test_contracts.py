"""Bundled message schemas load and mean what the worker produces."""

from __future__ import annotations

import json

import jsonschema
import pytest

from splitbox.contracts.load import (
    available_schemas,
    is_valid_instance,
    load_schema,
    validate_file,
    validate_instance,
)
from splitbox.core.worker import REQUEST_SCHEMA, RESPONSE_SCHEMA, handle_request
from splitbox.model.request import SplitRequest

_STATS = {
    "rawTokenCount": 1,
    "emptyRemoved": 0,
    "invalidRemoved": 0,
    "duplicatesRemoved": 0,
    "invalidExamples": [],
}


def test_available_schemas() -> None:
    assert available_schemas() == [
        "batch_manifest.schema.json",
        REQUEST_SCHEMA,
        RESPONSE_SCHEMA,
    ]


@pytest.mark.parametrize("name", ["batch_manifest.schema.json", REQUEST_SCHEMA, RESPONSE_SCHEMA])
def test_schemas_are_valid_draft_2020_12(name: str) -> None:
    jsonschema.Draft202012Validator.check_schema(load_schema(name))


def test_missing_schema() -> None:
    with pytest.raises(FileNotFoundError, match="schema not found"):
        load_schema("nope.schema.json")


class TestRequestSchema:
    def test_built_message_is_valid(self) -> None:
        msg = SplitRequest(raw_input="a", custom_pattern="x").to_message()
        validate_instance(msg, REQUEST_SCHEMA)

    def test_unknown_mode_rejected(self) -> None:
        msg = SplitRequest(raw_input="a").to_message()
        msg["splitMode"] = "by_bytes"
        assert not is_valid_instance(msg, REQUEST_SCHEMA)

    def test_extra_key_rejected(self) -> None:
        msg = SplitRequest(raw_input="a").to_message()
        msg["dedupe"] = True
        assert not is_valid_instance(msg, REQUEST_SCHEMA)


class TestResponseSchema:
    """A result or an error, never both."""

    def test_result(self) -> None:
        group = {"index": 0, "items": ["a"], "label": "Batch 1 (1 item)"}
        assert is_valid_instance({"groups": [group], "stats": _STATS}, RESPONSE_SCHEMA)

    def test_error(self) -> None:
        assert is_valid_instance({"error": "boom"}, RESPONSE_SCHEMA)

    def test_both(self) -> None:
        assert not is_valid_instance({"groups": [], "stats": _STATS, "error": "x"}, RESPONSE_SCHEMA)

    def test_neither(self) -> None:
        assert not is_valid_instance({}, RESPONSE_SCHEMA)

    def test_invalid_examples_capped(self) -> None:
        stats = dict(_STATS, invalidExamples=["x"] * 6)
        assert not is_valid_instance({"groups": [], "stats": stats}, RESPONSE_SCHEMA)

    @pytest.mark.parametrize("value", [3, 0])
    def test_worker_output_conforms(self, value: int) -> None:
        response = handle_request(SplitRequest(raw_input="a\nb\nc", split_value=value).to_message())
        validate_instance(response, RESPONSE_SCHEMA)


def test_validate_file(tmp_path) -> None:
    p = tmp_path / "resp.json"
    p.write_text(json.dumps({"error": "boom"}), encoding="utf-8")
    validate_file(p, RESPONSE_SCHEMA)
    p.write_text(json.dumps({"error": 1}), encoding="utf-8")
    with pytest.raises(jsonschema.ValidationError):
        validate_file(p, RESPONSE_SCHEMA)
