"""Loan provisioning summary endpoint."""

from __future__ import annotations

from covenant_engine import encode_policy_summaries, summarize_policies
from fastapi import APIRouter, Request, Response

from ..decode import parse_provisioning_request
from ..respond import json_response


def build_router() -> APIRouter:
    """Build FastAPI router for provisioning bucket summaries."""
    router = APIRouter(prefix="/provisioning", tags=["provisioning"])

    async def _summary(request: Request) -> Response:
        """Summarize one loan population under each named policy rule set.

        Request body:
            loans: LoanLevelRow objects
            policies: object mapping policy name -> ProvisioningRule list

        Returns:
            policies: [{policy, summary}] in request order. Every summary ends
                with an ``unclassified`` bucket so totals reconcile.

        Overlapping or inverted rule ranges and negative balances or days
        past due are rejected with 400 INVALID_INPUT.
        """
        req = parse_provisioning_request(await request.body())
        summaries = summarize_policies(req["loans"], req["policies"])
        return json_response({"policies": encode_policy_summaries(summaries)})

    router.add_api_route("/summary", _summary, methods=["POST"], response_model=None)

    return router


__all__ = ["build_router"]
