"""Logging context and request tracing."""

import json
import logging

import pytest
from libs.common.logging import (
    JsonFormatter,
    RequestContextFilter,
    clear_request_context,
    get_request_id,
    set_request_context,
)


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "storefront.test", logging.INFO, __file__, 1, message, None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
def test_filter_attaches_bound_request_context():
    set_request_context(request_id="req-1", path="/api/products", method="GET")
    try:
        record = _record()
        RequestContextFilter().filter(record)
    finally:
        clear_request_context()

    assert record.request_id == "req-1"
    assert record.request_path == "/api/products"
    assert record.request_method == "GET"
    assert get_request_id() is None


@pytest.mark.unit
def test_filter_outside_a_request():
    record = _record()
    RequestContextFilter().filter(record)

    assert record.request_id == "-"
    assert record.request_path is None


@pytest.mark.unit
def test_set_request_context_generates_an_id():
    try:
        request_id = set_request_context()
        assert request_id
        assert get_request_id() == request_id
    finally:
        clear_request_context()


@pytest.mark.unit
def test_json_formatter_merges_extra_fields():
    record = _record(
        "Request completed",
        request_id="req-2",
        request_path="/api/search",
        request_method="POST",
        extra_fields={"status_code": 200, "duration_ms": 1.5},
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Request completed"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-2"
    assert payload["path"] == "/api/search"
    assert payload["method"] == "POST"
    assert payload["status_code"] == 200


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "trace-abc"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "trace-abc"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_id_is_generated(client):
    response = await client.get("/api/categories")

    assert response.headers["X-Request-ID"]
