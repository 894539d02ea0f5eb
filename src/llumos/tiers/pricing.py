"""List prices for paid tiers and the billing amounts they map to.

The pricing page shows whole dollars; the billing provider charges in
cents. Both must stay aligned.
"""

from __future__ import annotations

from types import MappingProxyType

from llumos.models import PlanPrice, PlanTier
from llumos.tiers.quotas import normalize_tier

BILLING_INTERVALS = ("monthly", "yearly")

PLAN_PRICES: MappingProxyType[PlanTier, PlanPrice] = MappingProxyType({
    PlanTier.STARTER: PlanPrice(monthly=49, yearly=490),
    PlanTier.GROWTH: PlanPrice(monthly=99, yearly=990),
    PlanTier.PRO: PlanPrice(monthly=225, yearly=2250),
})


def get_plan_price(tier: object) -> PlanPrice | None:
    """Return the list price for *tier*, or None if it has no public price."""
    resolved = normalize_tier(tier)
    if resolved is None:
        return None
    return PLAN_PRICES.get(resolved)


def billing_amount_cents(tier: object, interval: str) -> int:
    """Amount in cents charged for *tier* per *interval*."""
    if interval not in BILLING_INTERVALS:
        raise ValueError(
            f"Unknown billing interval: {interval!r}. "
            f"Available: {', '.join(BILLING_INTERVALS)}"
        )
    price = get_plan_price(tier)
    if price is None:
        raise ValueError(f"No list price for tier: {tier!r}")
    return getattr(price, interval) * 100
