"""Liveness payloads shared by services.

The covenant services hold no connections, so liveness is the only check:
a process that can answer is ready.
"""

from __future__ import annotations

from typing import Literal

from typing_extensions import TypedDict


class HealthResponse(TypedDict):
    """Response for the liveness check (/healthz)."""

    status: Literal["ok"]
    service: str


def healthz(service: str) -> HealthResponse:
    """Liveness check; never checks dependencies."""
    return {"status": "ok", "service": service}


__all__ = ["HealthResponse", "healthz"]
