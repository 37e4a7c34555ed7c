"""Tests for shared msgspec helpers and request contracts."""

from __future__ import annotations

import json

import msgspec
import pytest

from search.models import ReplaceRequest, SearchHit, SearchRequest
from serde_msgspec import convert, dumps_json, loads_toml, to_builtins, validation_error_payload


def test_requests_use_camel_case_wire_names() -> None:
    """Ensure editor payload keys map onto request fields."""
    request = convert(
        {
            "query": "foo",
            "rootPath": "/tmp/project",
            "maxFileSize": 10,
            "caseSensitive": True,
            "wholeWord": True,
            "isRegex": True,
            "extraPaths": ["/tmp/a.txt"],
        },
        target_type=SearchRequest,
    )
    assert request.root_path == "/tmp/project"
    assert request.max_file_size == 10
    assert request.case_sensitive and request.whole_word and request.is_regex
    assert request.extra_paths == ("/tmp/a.txt",)


def test_replace_request_defaults_to_dry_run() -> None:
    """Ensure a replace request previews unless told otherwise."""
    request = convert({"query": "a", "replacement": "b"}, target_type=ReplaceRequest)
    assert request.dry_run is True
    assert request.replacement == "b"


def test_unknown_request_fields_are_rejected() -> None:
    """Ensure typos in payload keys fail validation."""
    with pytest.raises(msgspec.ValidationError):
        convert({"query": "a", "root_path": "/x"}, target_type=SearchRequest)


def test_negative_max_file_size_is_rejected() -> None:
    """Ensure size limits must be non-negative."""
    with pytest.raises(msgspec.ValidationError) as excinfo:
        convert({"query": "a", "maxFileSize": -1}, target_type=SearchRequest)
    payload = validation_error_payload(excinfo.value)
    assert payload["type"] == "ValidationError"
    assert payload["path"] == "$.maxFileSize"


def test_results_serialize_with_snake_case_keys() -> None:
    """Ensure result rows serialize with their field names."""
    hit = SearchHit(file_path="/a.txt", line_number=3, line_content="x")
    assert to_builtins(hit) == {"file_path": "/a.txt", "line_number": 3, "line_content": "x"}
    assert json.loads(dumps_json([hit], pretty=True)) == [to_builtins(hit)]


def test_loads_toml_requires_mapping() -> None:
    """Ensure TOML documents decode into mappings."""
    assert loads_toml(b'log-level = "DEBUG"\n') == {"log-level": "DEBUG"}
