from __future__ import annotations

import os
import socket
import sys
from collections.abc import Callable, Iterator
from copy import deepcopy
from pathlib import Path
from typing import Any

import pytest
import structlog


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_path = repo_root / "src"
    sys.path.insert(0, str(src_path))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


@pytest.fixture
def make_settings() -> Callable[..., Any]:
    """Build Settings from a mapping without touching the process environment."""
    from secure_error_api.config.settings import Settings

    def _make(
        *,
        environment: str = "production",
        overrides: dict[str, Any] | None = None,
    ) -> Settings:
        data: dict[str, Any] = {"app": {"environment": environment}}
        if overrides:
            data = _deep_merge(data, overrides)
        return Settings.from_mapping(data)

    return _make


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Keep one test's logging configuration from leaking into the next."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _disable_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Prevent accidental real network calls in unit/integration tests.

    In-process ASGI transports (TestClient, httpx.ASGITransport) never open sockets.
    """
    if (os.environ.get("ALLOW_NETWORK_TESTS") or "").strip().lower() in {"1", "true", "yes"}:
        return

    def _blocked(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError(
            "Network access is disabled in tests (set ALLOW_NETWORK_TESTS=1 to override)."
        )

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked, raising=True)
