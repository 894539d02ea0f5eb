"""Local verification of backend-issued access tokens.

The backend signs user access tokens with the project's JWT secret
(HS256, audience ``authenticated``). Verifying them locally avoids a
round trip to the auth service on every request.
"""

from __future__ import annotations

import jwt

from llumos.models import AuthenticatedUser

_ALGORITHM = "HS256"
DEFAULT_AUDIENCE = "authenticated"


class JwtAuthProvider:
    """AuthProvider that checks signature, expiry and audience."""

    def __init__(self, jwt_secret: str, audience: str = DEFAULT_AUDIENCE) -> None:
        if not jwt_secret:
            raise ValueError("JWT secret must not be empty")
        self._jwt_secret = jwt_secret
        self._audience = audience

    async def get_user(self, token: str) -> AuthenticatedUser | None:
        """Validate *token*. Returns the user or None."""
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[_ALGORITHM],
                audience=self._audience,
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError:
            return None

        return AuthenticatedUser(
            id=payload["sub"],
            email=payload.get("email"),
            role=payload.get("role"),
        )
