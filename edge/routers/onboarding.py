"""Onboarding checklist status."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from edge.auth.dependencies import require_user
from edge.responses import CORS_HEADERS, json_error, read_json_body
from llumos.backends.base import BackendError, RowCounter
from llumos.models import AuthenticatedUser, OrgSnapshot
from llumos.onboarding.checklist import check_completion_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])

_counter: RowCounter | None = None


class ChecklistRequest(BaseModel):
    org_id: str = Field(..., min_length=1)
    verified_at: datetime | None = None
    competitors: list[str] = Field(default_factory=list)
    report_downloaded: bool = False


def _validation_message(exc: ValidationError) -> str:
    """Name the first field that failed; a bad org_id reads as missing."""
    loc = exc.errors()[0]["loc"]
    field = str(loc[0]) if loc else "body"
    if field == "org_id":
        return "org_id is required"
    return f"Invalid {field}"


def init_router(counter: RowCounter) -> None:
    global _counter  # noqa: PLW0603
    _counter = counter


def _get_counter() -> RowCounter:
    assert _counter is not None, "RowCounter not initialized"
    return _counter


@router.post("/checklist")
async def onboarding_checklist(
    request: Request,
    user: Annotated[AuthenticatedUser, Depends(require_user)],
) -> JSONResponse:
    try:
        body = ChecklistRequest.model_validate(await read_json_body(request))
    except ValidationError as e:
        return json_error(_validation_message(e), 400)

    org = OrgSnapshot(
        id=body.org_id,
        verified_at=body.verified_at,
        competitors=body.competitors,
    )
    try:
        status = await check_completion_status(
            _get_counter(), org, report_downloaded=body.report_downloaded,
        )
    except BackendError:
        logger.exception("Error checking onboarding status for org %s", body.org_id)
        return json_error("Failed to load onboarding status", 502)

    return JSONResponse(
        {
            "items": [item.model_dump() for item in status.items],
            "completed_count": status.completed_count,
            "total": status.total,
            "progress_percent": status.progress_percent,
            "all_completed": status.all_completed,
        },
        headers=CORS_HEADERS,
    )
