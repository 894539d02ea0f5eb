"""In-memory backend, for development and testing.

Holds subscriber rows, table rows and token-to-user mappings in plain
dicts. Satisfies SubscriptionStore, AuthProvider and RowCounter.
"""

from __future__ import annotations

from typing import Any

from llumos.backends.base import BackendError, SubscriptionLookupError
from llumos.models import AuthenticatedUser, Subscriber


class InMemoryBackend:
    """Backend backed by static mappings.

    ``fail_lookups`` makes every subscriber lookup raise
    ``SubscriptionLookupError``, which is how tests exercise the
    fail-closed path.
    """

    def __init__(
        self,
        subscribers: dict[str, dict[str, Any]] | None = None,
        tables: dict[str, list[dict[str, Any]]] | None = None,
        tokens: dict[str, AuthenticatedUser] | None = None,
        *,
        fail_lookups: bool = False,
    ) -> None:
        self._subscribers = subscribers or {}
        self._tables = tables or {}
        self._tokens = tokens or {}
        self._fail_lookups = fail_lookups
        self.lookup_count = 0

    async def get_subscriber(self, user_id: str) -> Subscriber | None:
        self.lookup_count += 1
        if self._fail_lookups:
            raise SubscriptionLookupError(f"Lookup failed for user '{user_id}'")
        row = self._subscribers.get(user_id)
        if row is None:
            return None
        return Subscriber.model_validate(row)

    async def get_user(self, token: str) -> AuthenticatedUser | None:
        return self._tokens.get(token)

    async def count_rows(self, table: str, column: str, value: str) -> int:
        if table not in self._tables:
            raise BackendError(f"Unknown table: {table}")
        return sum(1 for row in self._tables[table] if row.get(column) == value)

    # --- Test helpers ---

    def add_subscriber(self, user_id: str, **row: Any) -> None:
        self._subscribers[user_id] = row

    def add_token(self, token: str, user: AuthenticatedUser) -> None:
        self._tokens[token] = user

    def insert(self, table: str, row: dict[str, Any]) -> None:
        self._tables.setdefault(table, []).append(row)
