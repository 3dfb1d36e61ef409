"""Early-warning endpoints: trend charts, scenario projection and alerts."""

from __future__ import annotations

from covenant_engine import (
    ScenarioBaseline,
    encode_alert,
    encode_merged_trend,
    encode_scenario_projection,
    merge_trend,
    order_alerts,
    project_scenario,
)
from fastapi import APIRouter, Request, Response
from platform_core.json_utils import JSONValue
from platform_core.logging import get_logger

from ..decode import parse_alerts_request, parse_scenario_request, parse_trend_request
from ..respond import json_response

_logger = get_logger(__name__)


def build_router(baseline: ScenarioBaseline) -> APIRouter:
    """Build FastAPI router for early-warning views.

    Args:
        baseline: Constants of the scenario projection.
    """
    router = APIRouter(prefix="/early-warnings", tags=["early-warnings"])

    async def _trend(request: Request) -> Response:
        """Merge actuals and projections into one chart series.

        The last actual point also carries its value as ``projected``; all
        other gaps are null.
        """
        req = parse_trend_request(await request.body())
        merged = merge_trend(
            req["actuals"], req["projections"], req["threshold"], req["granularity"]
        )
        return json_response(encode_merged_trend(merged))

    async def _scenario(request: Request) -> Response:
        """Project both scenario metrics for one control value."""
        req = parse_scenario_request(await request.body())
        projection = project_scenario(req["control"], baseline)
        _logger.debug("scenario_projected", extra={"control_value": req["control"]})
        return json_response(encode_scenario_projection(projection))

    async def _alerts(request: Request) -> Response:
        """Alerts ordered critical, warning, info, each with its arrow direction."""
        alerts = parse_alerts_request(await request.body())
        encoded: list[JSONValue] = [encode_alert(a) for a in order_alerts(alerts)]
        return json_response({"alerts": encoded})

    router.add_api_route("/trend", _trend, methods=["POST"], response_model=None)
    router.add_api_route("/scenario", _scenario, methods=["POST"], response_model=None)
    router.add_api_route("/alerts", _alerts, methods=["POST"], response_model=None)

    return router


__all__ = ["build_router"]
