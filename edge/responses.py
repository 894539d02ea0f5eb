"""Shared request and response helpers for edge functions."""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from llumos.gating.enforcement import gating_error_body
from llumos.models import GatingResult

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse the body as a JSON object; anything else reads as empty."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def json_error(message: str, status_code: int) -> JSONResponse:
    """An ``{"error": message}`` body with CORS headers."""
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


def create_gating_error_response(
    result: GatingResult,
    cors_headers: dict[str, str],
) -> JSONResponse:
    """403 response for a denied gating check."""
    return JSONResponse(
        gating_error_body(result),
        status_code=403,
        headers={**cors_headers, "Content-Type": "application/json"},
    )
