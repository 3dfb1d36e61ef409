"""Covenant compliance endpoints."""

from __future__ import annotations

from covenant_engine import (
    breached_covenants,
    build_reading_history,
    encode_covenant_evaluation,
    encode_history_row,
    evaluate_covenants,
)
from fastapi import APIRouter, Request, Response
from platform_core.json_utils import JSONValue
from platform_core.logging import get_logger

from ..decode import parse_covenants_request
from ..respond import json_response

_logger = get_logger(__name__)


def build_router() -> APIRouter:
    """Build FastAPI router for covenant evaluation and history.

    Returns:
        Router with POST /covenants/evaluate and POST /covenants/history.
    """
    router = APIRouter(prefix="/covenants", tags=["covenants"])

    async def _evaluate(request: Request) -> Response:
        """Evaluate every covenant against its readings.

        Request body:
            covenants: CovenantDefinition objects
            readings: CovenantReading objects, any order

        Returns:
            evaluations: one per covenant, in request order; a null status
                means the covenant has no readings
            breached: ids of covenants whose latest reading is breached
        """
        req = parse_covenants_request(await request.body())
        evaluations = evaluate_covenants(req["covenants"], req["readings"])
        breached: list[JSONValue] = [e["covenant_id"] for e in breached_covenants(evaluations)]
        if breached:
            _logger.info("covenants_breached", extra={"breached_count": len(breached)})
        encoded: list[JSONValue] = [encode_covenant_evaluation(e) for e in evaluations]
        return json_response({"evaluations": encoded, "breached": breached})

    async def _history(request: Request) -> Response:
        """Value of every covenant metric as of each distinct reading date."""
        req = parse_covenants_request(await request.body())
        rows = build_reading_history(req["covenants"], req["readings"])
        encoded: list[JSONValue] = [encode_history_row(r) for r in rows]
        return json_response({"rows": encoded})

    router.add_api_route("/evaluate", _evaluate, methods=["POST"], response_model=None)
    router.add_api_route("/history", _history, methods=["POST"], response_model=None)

    return router


__all__ = ["build_router"]
