#!/usr/bin/env python3
"""Demo: Quotas and Local AI Authority gating.

Walks a handful of subscribers through the quota evaluator and the
server-side gate, using the in-memory backend in place of Supabase.

Run from the project root:
    python examples/demo_gating.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from llumos.backends.memory import InMemoryBackend
from llumos.gating.enforcement import gating_error_body, validate_local_authority_access
from llumos.tiers.usage import quota_usage_for_tier

# ANSI colors
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

SUBSCRIBERS = {
    "alice": {"subscription_tier": "growth", "subscribed": True, "payment_collected": True},
    "bob": {"subscription_tier": "starter", "subscribed": True, "payment_collected": True},
    "carol": {"subscription_tier": "agency", "subscribed": True, "payment_collected": False},
    "dave": {"subscription_tier": "PRO", "subscribed": True, "payment_collected": True},
}


def _show_usage() -> None:
    print(f"{BOLD}Free plan usage{RESET}")
    for used in (2, 4, 5, 7):
        usage = quota_usage_for_tier("free", used)
        assert usage is not None
        if usage.is_at_limit:
            state = f"{RED}at limit{RESET}"
        elif usage.is_near_limit:
            state = f"{YELLOW}near limit{RESET}"
        else:
            state = f"{GREEN}ok{RESET}"
        print(
            f"  {used} used  {usage.usage_percent:5.1f}%  "
            f"{usage.remaining} left  {state}"
        )
    print(f"  growth plan usage bar: {DIM}{quota_usage_for_tier('growth', 50)}{RESET}")
    print()


async def _show_gate(backend: InMemoryBackend) -> None:
    print(f"{BOLD}Local AI Authority access{RESET}")
    for user_id in (*SUBSCRIBERS, "eve"):
        result = await validate_local_authority_access(backend, user_id)
        if result.allowed:
            assert result.limits is not None
            print(
                f"  {user_id:<6} {GREEN}ALLOW{RESET}  tier={result.tier} "
                f"profiles={result.limits.max_profiles} "
                f"models={','.join(result.limits.models_allowed)}"
            )
        else:
            body = gating_error_body(result)
            print(f"  {user_id:<6} {RED}403{RESET}    {DIM}{body['message']}{RESET}")


def main() -> None:
    backend = InMemoryBackend(SUBSCRIBERS)
    _show_usage()
    asyncio.run(_show_gate(backend))


if __name__ == "__main__":
    main()
