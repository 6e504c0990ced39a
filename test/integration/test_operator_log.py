from __future__ import annotations

import io
import json

import structlog
from fastapi.testclient import TestClient

from secure_error_api.app.server import create_app
from secure_error_api.config.settings import ObservabilitySettings
from secure_error_api.observability.logger import configure_logging

GENERIC_BODY = {"message": "An unexpected error occurred. Please try again later."}


def _configure_into_stream(log_format: str) -> io.StringIO:
    stream = io.StringIO()
    configure_logging(ObservabilitySettings(log_format=log_format), stream=stream)
    # Module-level loggers must not pin this configuration for later tests.
    structlog.configure(cache_logger_on_first_use=False)
    return stream


def _fault_records(stream: io.StringIO) -> list[dict]:
    records = [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]
    return [record for record in records if record.get("event") == "http.unhandled_exception"]


def test_json_operator_log_holds_what_the_client_never_sees(make_settings) -> None:
    stream = _configure_into_stream("json")
    client = TestClient(create_app(make_settings()), raise_server_exceptions=False)

    response = client.post(
        "/api/error/trigger",
        json={"simulatedInput": "abc"},
        headers={"X-Request-Id": "req-op-1"},
    )

    assert response.status_code == 500
    assert response.json() == GENERIC_BODY

    faults = _fault_records(stream)
    assert len(faults) == 1
    fault = faults[0]

    assert fault["level"] == "error"
    assert fault["logger"] == "secure_error_api.errors"
    assert fault["path"] == "/api/error/trigger"
    assert fault["method"] == "POST"
    assert fault["request_id"] == "req-op-1"
    assert fault["exc_type"] == "TypeError"
    assert "timestamp" in fault
    assert "Traceback" in fault["exception"]
    assert "trigger_error" in fault["exception"]
    assert "TypeError: 'NoneType' object is not subscriptable" in fault["exception"]

    for leaked in ("Traceback", "NoneType", "trigger_error", "TypeError"):
        assert leaked not in response.text


def test_credential_like_fault_text_is_logged_verbatim(make_settings) -> None:
    stream = _configure_into_stream("json")
    app = create_app(make_settings())
    message = "lookup failed for token=abc123 in cache"

    @app.get("/cache")
    def _lookup() -> None:
        raise RuntimeError(message)

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/cache")

    assert response.json() == GENERIC_BODY
    assert "abc123" not in response.text

    (fault,) = _fault_records(stream)
    assert fault["exc_message"] == message
    assert f"RuntimeError: {message}" in fault["exception"]


def test_human_operator_log_mentions_path_and_fault(make_settings) -> None:
    stream = _configure_into_stream("human")
    client = TestClient(create_app(make_settings()), raise_server_exceptions=False)

    response = client.post("/api/error/trigger", json={"simulatedInput": "abc"})

    assert response.json() == GENERIC_BODY
    output = stream.getvalue()
    assert "http.unhandled_exception" in output
    assert "/api/error/trigger" in output
    assert "not subscriptable" in output
