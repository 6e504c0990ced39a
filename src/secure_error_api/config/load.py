"""Assemble Settings from `.env`, an optional YAML file and the process environment."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from secure_error_api.config.settings import Settings
from secure_error_api.config.validate import (
    ConfigValidationError,
    ConfigValidationIssue,
    issues_from_pydantic_error,
    validate_settings,
)

DEFAULT_CONFIG_PATH = Path("config/config.yaml")

_HINTS: dict[str, str] = {
    "app.environment": "Use `APP_ENV=development` or `APP_ENV=production`.",
    "observability.log_format": "Use `LOG_FORMAT=json` or `LOG_FORMAT=human`.",
}


def _fail(path: str, message: str) -> ConfigValidationError:
    return ConfigValidationError([ConfigValidationIssue(path=path, message=message)])


def _pick_config_file(config_path: str | Path | None) -> Path | None:
    # An explicitly requested file must exist; the default one is optional.
    requested = config_path or os.environ.get("CONFIG_PATH")
    if not requested:
        return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.is_file() else None

    path = Path(requested)
    if not path.exists():
        raise _fail("CONFIG_PATH", f"Config file not found: {path}")
    return path


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        raise _fail(str(path), f"Unable to read config file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise _fail(str(path), f"Invalid YAML: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise _fail(str(path), "YAML root must be a mapping/object")
    return raw


def _with_hint(issue: ConfigValidationIssue) -> ConfigValidationIssue:
    hint = _HINTS.get(issue.path)
    if hint is None or hint in issue.message:
        return issue
    return ConfigValidationIssue(issue.path, f"{issue.message} {hint}")


def load_settings(*, config_path: str | Path | None = None) -> Settings:
    """
    Load and validate settings.

    Precedence, highest first: environment variables (nested, then flat names),
    YAML values, defaults. `.env` only fills variables the environment does not set.
    """
    if Path(".env").is_file():
        load_dotenv(dotenv_path=".env", override=False)

    path = _pick_config_file(config_path)
    yaml_data = _read_yaml_mapping(path) if path is not None else {}

    try:
        settings = Settings(**yaml_data)
    except ValidationError as exc:
        issues = [_with_hint(issue) for issue in issues_from_pydantic_error(exc)]
        raise ConfigValidationError(issues) from exc

    validate_settings(settings)
    return settings
