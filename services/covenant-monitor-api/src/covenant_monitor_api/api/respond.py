"""JSON responses tagged with the content key of their body."""

from __future__ import annotations

from collections.abc import Mapping

from covenant_engine import content_key
from fastapi import Response
from platform_core.json_utils import JSONValue, dump_json_str


def json_response(body: Mapping[str, JSONValue]) -> Response:
    """Serialize body and set ``ETag`` to its content key.

    Identical inputs produce identical bodies, so the tag lets callers cache
    results by content.
    """
    return Response(
        content=dump_json_str(body),
        media_type="application/json",
        headers={"etag": f'"{content_key(body)}"'},
    )


__all__ = ["json_response"]
