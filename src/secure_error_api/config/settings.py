from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from secure_error_api.config.env_aliases import get_flat_env_settings_source

DEFAULT_CORS_ORIGIN = "http://localhost:3000"


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


def _lowercase(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class AppSettings(_Section):
    name: str = "secure-error-api"
    # Only development relaxes redaction of 500 bodies and exposes /docs.
    environment: Environment = Environment.PRODUCTION

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value: Any) -> Any:
        return _lowercase(value)

    @property
    def is_development(self) -> bool:
        return self.environment is Environment.DEVELOPMENT


class ServerSettings(_Section):
    host: str = "127.0.0.1"
    port: int = Field(8080, gt=0, lt=65536)


class CorsSettings(_Section):
    allow_origins: list[str] = Field(default_factory=lambda: [DEFAULT_CORS_ORIGIN])
    allow_methods: list[str] = Field(default_factory=lambda: ["*"])
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = False

    @field_validator("allow_origins", "allow_methods", "allow_headers", mode="before")
    @classmethod
    def _accept_csv(cls, value: Any) -> Any:
        return _split_csv(value)


class ErrorHandlingSettings(_Section):
    # Adds the correlation id (never fault content) to the redacted 500 body.
    expose_request_id: bool = False


class ObservabilitySettings(_Section):
    log_level: str = "INFO"
    # Wins over json_logs when set.
    log_format: Literal["json", "human"] | None = None
    json_logs: bool = False
    healthz_omit_version: bool = False

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: Any) -> Any:
        return _lowercase(value)


class Settings(BaseSettings):
    # .env is read by load_settings() via python-dotenv, so flat names work there too.
    model_config = SettingsConfigDict(env_nested_delimiter="__", extra="forbid")

    reads_environment: ClassVar[bool] = True

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    errors: ErrorHandlingSettings = Field(default_factory=ErrorHandlingSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Build settings from `data` and defaults only; the environment is ignored."""
        return _MappingOnlySettings(**dict(data))

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        if not cls.reads_environment:
            return (init_settings,)
        # Nested env names, then flat names, then YAML/init values.
        return (env_settings, get_flat_env_settings_source, init_settings, file_secret_settings)


class _MappingOnlySettings(Settings):
    reads_environment: ClassVar[bool] = False
