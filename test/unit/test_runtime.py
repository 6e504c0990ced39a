from __future__ import annotations

from typing import Any

from secure_error_api import runtime


def test_main_wires_settings_logging_and_uvicorn(monkeypatch, make_settings) -> None:
    settings = make_settings(
        overrides={
            "server": {"host": "0.0.0.0", "port": 8181},
            "observability": {"log_level": "DEBUG", "json_logs": True},
        }
    )
    logging_calls: list[Any] = []
    run_calls: list[tuple[Any, dict[str, Any]]] = []

    monkeypatch.setattr(runtime, "load_settings", lambda: settings)
    monkeypatch.setattr(runtime, "configure_logging", logging_calls.append)
    monkeypatch.setattr(runtime.uvicorn, "run", lambda app, **kw: run_calls.append((app, kw)))

    assert runtime.main() == 0

    assert logging_calls == [settings.observability]
    app, kwargs = run_calls[0]
    assert app.state.settings is settings
    assert kwargs == {"host": "0.0.0.0", "port": 8181, "log_config": None}


def test_build_app_uses_given_settings_without_loading(monkeypatch, make_settings) -> None:
    settings = make_settings(environment="development")

    def _unexpected_load():
        raise AssertionError("settings were passed in")

    monkeypatch.setattr(runtime, "load_settings", _unexpected_load)
    monkeypatch.setattr(runtime, "configure_logging", lambda observability: None)

    app = runtime.build_app(settings)

    assert app.state.settings is settings
    assert app.docs_url == "/docs"
