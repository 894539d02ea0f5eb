"""Server-side Local AI Authority gate.

This is the authorization boundary for the feature: the advisory check in
:mod:`llumos.gating.plan_gating` can be bypassed by any client. The gate
fails closed. Every failure path, including unexpected exceptions,
becomes a denial result, so callers can treat the return value as
authoritative.

Usage::

    result = await validate_local_authority_access(store, user.id)
    if not result.allowed:
        return gating_error_body(result)  # with HTTP status 403
"""

from __future__ import annotations

import logging
from typing import Any

from llumos.backends.base import SubscriptionLookupError, SubscriptionStore
from llumos.gating.plan_gating import check_local_authority_access, get_minimum_required_tier
from llumos.models import GatingResult

logger = logging.getLogger(__name__)

GATING_ERROR_CODE = "subscription_required"

NO_SUBSCRIPTION_REASON = (
    "No subscription found. Please subscribe to access Local AI Authority."
)
INACTIVE_REASON = "Your subscription is not active. Please ensure payment is collected."
LOOKUP_ERROR_REASON = "Error validating subscription. Please try again."


async def validate_local_authority_access(
    store: SubscriptionStore,
    user_id: str,
) -> GatingResult:
    """Check whether *user_id* may use Local AI Authority.

    Always re-fetches the subscriber row. Inactive billing denies access
    even when the stored tier is eligible.
    """
    try:
        subscriber = await store.get_subscriber(user_id)
    except SubscriptionLookupError as e:
        logger.warning("Subscription lookup failed for %s: %s", user_id, e)
        return GatingResult(allowed=False, tier=None, reason=NO_SUBSCRIPTION_REASON)
    except Exception:
        logger.exception("Error validating Local Authority access for %s", user_id)
        return GatingResult(allowed=False, tier=None, reason=LOOKUP_ERROR_REASON)

    if subscriber is None:
        return GatingResult(allowed=False, tier=None, reason=NO_SUBSCRIPTION_REASON)

    if not subscriber.is_active:
        stored = subscriber.subscription_tier
        return GatingResult(
            allowed=False,
            tier=(stored or "").strip().lower() or None,
            reason=INACTIVE_REASON,
        )

    return check_local_authority_access(subscriber.subscription_tier)


def gating_error_body(result: GatingResult) -> dict[str, Any]:
    """The fixed-shape payload sent with a 403 gating denial."""
    return {
        "error": GATING_ERROR_CODE,
        "message": result.reason,
        "current_tier": result.tier,
        "required_tier": get_minimum_required_tier().value,
    }
