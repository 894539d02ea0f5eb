"""Tier catalog, quota evaluation and pricing."""

from llumos.tiers.pricing import PLAN_PRICES, billing_amount_cents, get_plan_price
from llumos.tiers.quotas import TIER_QUOTAS, get_quotas_for_tier, normalize_tier, resolve_tier
from llumos.tiers.usage import compute_usage, quota_usage_for_tier, should_display_usage

__all__ = [
    "PLAN_PRICES",
    "TIER_QUOTAS",
    "billing_amount_cents",
    "compute_usage",
    "get_plan_price",
    "get_quotas_for_tier",
    "normalize_tier",
    "quota_usage_for_tier",
    "resolve_tier",
    "should_display_usage",
]
