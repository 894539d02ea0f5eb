"""FastAPI dependencies for caller authentication."""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Request

from llumos.backends.base import AuthProvider
from llumos.models import AuthenticatedUser

INTERNAL_SECRET_HEADER = "x-internal-secret"

# Module-level references, set by app factory.
_auth_provider: AuthProvider | None = None
_internal_secret: str = ""


def init_auth(provider: AuthProvider, internal_secret: str = "") -> None:
    """Called by the app factory to inject the auth provider."""
    global _auth_provider, _internal_secret  # noqa: PLW0603
    _auth_provider = provider
    _internal_secret = internal_secret


def _get_auth_provider() -> AuthProvider:
    assert _auth_provider is not None, "AuthProvider not initialized"
    return _auth_provider


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header:
        return None
    token = auth_header.removeprefix("Bearer ").strip()
    return token or None


async def require_user(request: Request) -> AuthenticatedUser:
    """Require a valid bearer token. Returns 401 if missing/invalid."""
    token = _bearer_token(request)
    if token is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = await _get_auth_provider().get_user(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def is_internal_call(request: Request) -> bool:
    """True if the request carries the configured service-to-service secret.

    Never true when no secret is configured.
    """
    if not _internal_secret:
        return False
    supplied = request.headers.get(INTERNAL_SECRET_HEADER, "")
    return hmac.compare_digest(supplied.encode(), _internal_secret.encode())


async def require_user_or_internal(request: Request) -> AuthenticatedUser | None:
    """Accept internal calls (returns None) or a valid bearer token."""
    if is_internal_call(request):
        return None
    return await require_user(request)
