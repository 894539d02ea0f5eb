"""Supabase backend: subscriber lookups, token checks and row counts.

Wraps an async Supabase client created with the service-role key, so
queries bypass row-level security. Only the edge functions should hold
one.
"""

from __future__ import annotations

import logging

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client
from supabase_auth.errors import AuthError

from llumos.backends.base import (
    SUBSCRIBER_COLUMNS,
    SUBSCRIBERS_TABLE,
    BackendError,
    SubscriptionLookupError,
)
from llumos.models import AuthenticatedUser, Subscriber

logger = logging.getLogger(__name__)


class SupabaseBackend:
    """SubscriptionStore, AuthProvider and RowCounter over Supabase."""

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @classmethod
    async def connect(cls, url: str, service_role_key: str) -> SupabaseBackend:
        """Create a client for the project at *url*."""
        if not url or not service_role_key:
            raise BackendError("Supabase URL and service role key are required")
        client = await acreate_client(url, service_role_key)
        return cls(client)

    async def get_subscriber(self, user_id: str) -> Subscriber | None:
        try:
            response = (
                await self._client.table(SUBSCRIBERS_TABLE)
                .select(SUBSCRIBER_COLUMNS)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            raise SubscriptionLookupError(
                f"Subscriber lookup failed for user '{user_id}': {e}"
            ) from e

        if not response.data:
            return None
        return Subscriber.model_validate(response.data[0])

    async def get_user(self, token: str) -> AuthenticatedUser | None:
        try:
            response = await self._client.auth.get_user(token)
        except (AuthError, httpx.HTTPError) as e:
            logger.debug("Token rejected by auth service: %s", e)
            return None

        if response is None or response.user is None:
            return None
        user = response.user
        return AuthenticatedUser(id=user.id, email=user.email, role=user.role)

    async def count_rows(self, table: str, column: str, value: str) -> int:
        try:
            response = (
                await self._client.table(table)
                .select("id", count="exact", head=True)
                .eq(column, value)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            raise BackendError(f"Count on '{table}' failed: {e}") from e
        return response.count or 0
