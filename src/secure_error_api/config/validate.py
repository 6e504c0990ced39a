"""Cross-field checks that pydantic field types cannot express."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import urlsplit

from pydantic import ValidationError

from secure_error_api.config.settings import CorsSettings, Settings

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ConfigValidationIssue:
    path: str
    message: str


class ConfigValidationError(ValueError):
    """All configuration problems found in one pass, one line per issue."""

    def __init__(self, issues: Iterable[ConfigValidationIssue]):
        self.issues = list(issues)
        details = "\n".join(f"- {issue.path}: {issue.message}" for issue in self.issues)
        super().__init__(f"Configuration is invalid:\n{details}")


def issues_from_pydantic_error(error: ValidationError) -> list[ConfigValidationIssue]:
    return [
        ConfigValidationIssue(
            path=".".join(str(part) for part in item["loc"]) or "<root>",
            message=item["msg"],
        )
        for item in error.errors(include_url=False)
    ]


def _is_bare_origin(origin: str) -> bool:
    parts = urlsplit(origin)
    return (
        parts.scheme in {"http", "https"}
        and bool(parts.hostname)
        and parts.path in {"", "/"}
        and not parts.query
        and not parts.fragment
    )


def _cors_issues(cors: CorsSettings) -> Iterator[ConfigValidationIssue]:
    for index, origin in enumerate(cors.allow_origins):
        path = f"cors.allow_origins.{index}"
        if origin == "*":
            # Browsers reject a credentialed response with a wildcard origin.
            if cors.allow_credentials:
                yield ConfigValidationIssue(
                    path, "Wildcard origin cannot be combined with cors.allow_credentials=true."
                )
        elif not _is_bare_origin(origin):
            yield ConfigValidationIssue(
                path,
                f"Invalid CORS origin {origin!r}: expected scheme://host[:port] "
                "without path, query or fragment.",
            )


def validate_settings(settings: Settings) -> None:
    issues: list[ConfigValidationIssue] = []

    level = settings.observability.log_level
    if level.upper() not in LOG_LEVELS:
        issues.append(
            ConfigValidationIssue(
                "observability.log_level",
                f"Unsupported log level {level!r} (allowed: {', '.join(LOG_LEVELS)})",
            )
        )
    issues.extend(_cors_issues(settings.cors))

    if issues:
        raise ConfigValidationError(issues)
