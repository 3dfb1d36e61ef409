"""Health check route for covenant-monitor-api."""

from __future__ import annotations

from fastapi import APIRouter
from platform_core.health import HealthResponse, healthz
from platform_core.json_utils import JSONValue

_SERVICE_NAME = "covenant-monitor-api"

_HEALTHZ_RESPONSES: dict[int | str, dict[str, JSONValue]] = {
    200: {
        "description": "Service is alive",
        "content": {
            "application/json": {
                "example": {"status": "ok", "service": _SERVICE_NAME},
            },
        },
    },
}


def build_router() -> APIRouter:
    """Build health router with the /healthz endpoint.

    The service is stateless and holds no connections, so there is no
    separate readiness check.
    """
    router = APIRouter()

    def _healthz() -> HealthResponse:
        """Liveness check for container orchestration."""
        return healthz(_SERVICE_NAME)

    router.add_api_route(
        "/healthz",
        _healthz,
        methods=["GET"],
        response_model=None,
        summary="Liveness check",
        description="Liveness check for container orchestration. Returns 200 if running.",
        response_description="Health status",
        responses=_HEALTHZ_RESPONSES,
        tags=["health"],
    )
    return router


__all__ = ["build_router"]
