"""Tier catalog: plan tier to quota lookup.

The table is immutable. Lookups are total: anything that does not
normalize to a known tier resolves to the free tier.
"""

from __future__ import annotations

from types import MappingProxyType

from llumos.models import PlanTier, RunFrequency, TierQuotas

TIER_QUOTAS: MappingProxyType[PlanTier, TierQuotas] = MappingProxyType({
    PlanTier.FREE: TierQuotas(
        prompts_per_day=5,
        providers_per_prompt=1,
        max_users=1,
        max_brands=1,
        max_prompts=5,
        run_frequency=RunFrequency.WEEKLY,
    ),
    PlanTier.STARTER: TierQuotas(
        prompts_per_day=25, providers_per_prompt=2, max_users=1, max_brands=1,
    ),
    PlanTier.GROWTH: TierQuotas(
        prompts_per_day=100, providers_per_prompt=4, max_users=3, max_brands=3,
    ),
    PlanTier.PRO: TierQuotas(
        prompts_per_day=200, providers_per_prompt=4, max_users=5, max_brands=3,
    ),
    PlanTier.AGENCY: TierQuotas(
        prompts_per_day=300, providers_per_prompt=4, max_users=10, max_brands=10,
    ),
})


def normalize_tier(value: object) -> PlanTier | None:
    """Map a raw tier value to a PlanTier, or None if it isn't one.

    Surrounding whitespace is stripped and matching is case-insensitive.
    """
    if not isinstance(value, str):
        return None
    try:
        return PlanTier(value.strip().lower())
    except ValueError:
        return None


def resolve_tier(value: object) -> PlanTier:
    """Like :func:`normalize_tier` but falls back to the free tier."""
    return normalize_tier(value) or PlanTier.FREE


def get_quotas_for_tier(tier: object) -> TierQuotas:
    """Return the quotas for *tier*. Unknown or missing tiers get free."""
    return TIER_QUOTAS[resolve_tier(tier)]
