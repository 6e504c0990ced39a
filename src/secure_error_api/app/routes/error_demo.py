from __future__ import annotations

import structlog
from fastapi import APIRouter, Body
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter(prefix="/api/error", tags=["error"])

log = structlog.get_logger(__name__)


class GenerateRequest(BaseModel):
    """Demo payload; its content has no effect on the outcome."""

    model_config = ConfigDict(populate_by_name=True)

    simulated_input: str | None = Field(default=None, alias="simulatedInput")


def _load_samples() -> list[str] | None:
    # Stands in for a lookup that came back empty.
    return None


@router.post("/trigger")
def trigger_error(payload: GenerateRequest | None = Body(default=None)) -> str:
    """Always fails with an unhandled TypeError to exercise the error boundary."""
    simulated_input = payload.simulated_input if payload is not None else None
    log.info("error_demo.trigger_received", simulated_input=simulated_input)

    samples = _load_samples()
    value = samples[0]  # type: ignore[index]

    return f"This should not be reached. Value: {value}"
