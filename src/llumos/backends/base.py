"""Backend protocols and error types.

Llumos sits on a managed backend (database, auth, storage). These
protocols are the only surface the gate, the onboarding checklist and the
edge functions depend on. Built-in backends: SupabaseBackend (production),
InMemoryBackend (development/testing), JwtAuthProvider (local token checks).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from llumos.models import AuthenticatedUser, Subscriber

SUBSCRIBERS_TABLE = "subscribers"
SUBSCRIBER_COLUMNS = "subscription_tier, subscribed, payment_collected"


class BackendError(Exception):
    """Raised when the backend cannot answer a query."""


class SubscriptionLookupError(BackendError):
    """Raised when the subscriber query itself fails."""


@runtime_checkable
class SubscriptionStore(Protocol):
    """Anything that can fetch a user's subscriber row."""

    async def get_subscriber(self, user_id: str) -> Subscriber | None:
        """Return the subscriber row for *user_id*, or None if there is none.

        Raises:
            SubscriptionLookupError: If the query fails.
        """
        ...


@runtime_checkable
class AuthProvider(Protocol):
    """Resolves a bearer token to a user."""

    async def get_user(self, token: str) -> AuthenticatedUser | None:
        """Return the user for *token*, or None if it is not valid."""
        ...


@runtime_checkable
class RowCounter(Protocol):
    """Counts rows in a table matching a single equality filter."""

    async def count_rows(self, table: str, column: str, value: str) -> int:
        """Return the number of rows where ``column == value``.

        Raises:
            BackendError: If the query fails.
        """
        ...


@runtime_checkable
class Backend(SubscriptionStore, RowCounter, Protocol):
    """A backend that serves both subscriber lookups and row counts."""
