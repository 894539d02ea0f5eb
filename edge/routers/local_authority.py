"""Local AI Authority access check."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from edge.auth.dependencies import require_user
from edge.responses import CORS_HEADERS, create_gating_error_response
from llumos.backends.base import SubscriptionStore
from llumos.gating.enforcement import validate_local_authority_access
from llumos.models import AuthenticatedUser

router = APIRouter(prefix="/local-authority", tags=["local-authority"])

_store: SubscriptionStore | None = None


def init_router(store: SubscriptionStore) -> None:
    global _store  # noqa: PLW0603
    _store = store


def _get_store() -> SubscriptionStore:
    assert _store is not None, "SubscriptionStore not initialized"
    return _store


@router.get("/access")
async def local_authority_access(
    user: Annotated[AuthenticatedUser, Depends(require_user)],
) -> JSONResponse:
    """Gate result for the caller: 200 when allowed, 403 envelope otherwise."""
    result = await validate_local_authority_access(_get_store(), user.id)
    if not result.allowed:
        return create_gating_error_response(result, CORS_HEADERS)
    return JSONResponse(result.model_dump(mode="json"), headers=CORS_HEADERS)
