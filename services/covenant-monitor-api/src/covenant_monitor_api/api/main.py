"""Application factory for covenant-monitor-api."""

from __future__ import annotations

from fastapi import FastAPI
from platform_core.fastapi import install_exception_handlers_fastapi
from platform_core.logging import setup_logging
from platform_core.request_context import install_request_id_middleware

from ..core.config import Settings, scenario_baseline, settings_from_env
from .routes import covenants as routes_covenants
from .routes import early_warnings as routes_early_warnings
from .routes import health as routes_health
from .routes import provisioning as routes_provisioning


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings. If None, reads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = settings or settings_from_env()
    setup_logging(
        level=cfg["logging"]["level"],
        format_mode=cfg["logging"]["format"],
        service_name="covenant-monitor-api",
        instance_id=None,
        extra_fields=["request_id", "gaps", "error_code", "error_message", "path", "method"],
    )
    app = FastAPI(title="covenant-monitor-api", version="0.1.0")
    install_request_id_middleware(app)
    install_exception_handlers_fastapi(app, logger_name="covenant-monitor-api")

    app.include_router(routes_health.build_router())
    app.include_router(routes_covenants.build_router())
    app.include_router(routes_provisioning.build_router())
    app.include_router(routes_early_warnings.build_router(scenario_baseline(cfg)))

    return app


__all__ = ["create_app"]
