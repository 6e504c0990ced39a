from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(UTC)


def qualified_type_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ in {"builtins", "__main__"}:
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True)
class ErrorEvent:
    """
    One unhandled fault during one request.

    Lives only for the duration of the error response: it is logged to the operator
    channel and then dropped. Nothing here is ever copied into the redacted response.
    """

    exc: BaseException
    path: str
    method: str
    request_id: str | None = None
    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def exc_type(self) -> str:
        return qualified_type_name(self.exc)

    @property
    def exc_message(self) -> str:
        try:
            return str(self.exc)
        except Exception:
            return f"<unprintable {type(self.exc).__name__}>"

    @property
    def traceback_lines(self) -> list[str]:
        formatted = traceback.format_exception(self.exc)
        return "".join(formatted).splitlines()

    def log_fields(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "request_id": self.request_id,
            "exc_type": self.exc_type,
            "exc_message": self.exc_message,
            "occurred_at": self.occurred_at.isoformat(),
        }

    def diagnostics(self) -> dict[str, Any]:
        """Development-only detail: type, message and formatted stack."""
        return {
            "type": self.exc_type,
            "message": self.exc_message,
            "traceback": self.traceback_lines,
        }
