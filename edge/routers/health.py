"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from llumos import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
