"""Flat environment variable names (``APP_ENV``, ``LOG_LEVEL``, ...) for the nested settings."""
from __future__ import annotations

import os
from typing import Any

# Flat name -> (section, field). Nested names (APP__ENVIRONMENT) are read by pydantic-settings.
FLAT_ENV_NAMES: dict[str, tuple[str, str]] = {
    "APP_NAME": ("app", "name"),
    "APP_ENV": ("app", "environment"),
    "SERVER_HOST": ("server", "host"),
    "SERVER_PORT": ("server", "port"),
    "CORS_ALLOW_ORIGINS": ("cors", "allow_origins"),
    "CORS_ALLOW_METHODS": ("cors", "allow_methods"),
    "CORS_ALLOW_HEADERS": ("cors", "allow_headers"),
    "CORS_ALLOW_CREDENTIALS": ("cors", "allow_credentials"),
    "ERRORS_EXPOSE_REQUEST_ID": ("errors", "expose_request_id"),
    "LOG_LEVEL": ("observability", "log_level"),
    "LOG_FORMAT": ("observability", "log_format"),
    "LOG_JSON": ("observability", "json_logs"),
    "HEALTHZ_OMIT_VERSION": ("observability", "healthz_omit_version"),
}


def get_flat_env_settings_source() -> dict[str, Any]:
    sections: dict[str, dict[str, str]] = {}
    for env_name, (section, field) in FLAT_ENV_NAMES.items():
        value = os.environ.get(env_name)
        if value:
            sections.setdefault(section, {})[field] = value
    return sections
