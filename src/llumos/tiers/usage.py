"""Quota evaluator: remaining allowance and threshold state.

Usage::

    usage = quota_usage_for_tier("free", prompts_used=4)
    if usage is not None and usage.is_near_limit:
        ...
"""

from __future__ import annotations

from llumos.models import PlanTier, QuotaUsage, TierQuotas
from llumos.tiers.quotas import get_quotas_for_tier, resolve_tier

NEAR_LIMIT_PERCENT = 80.0


def compute_usage(
    prompts_used: int,
    limits: TierQuotas,
    tier: PlanTier = PlanTier.FREE,
) -> QuotaUsage:
    """Evaluate *prompts_used* against *limits*.

    A zero ceiling counts as always at-limit with 0% shown.
    """
    if prompts_used < 0:
        raise ValueError(f"prompts_used must be >= 0, got {prompts_used}")

    max_prompts = limits.effective_max_prompts
    if max_prompts == 0:
        usage_percent = 0.0
    else:
        usage_percent = min(prompts_used * 100 / max_prompts, 100.0)

    return QuotaUsage(
        tier=tier,
        prompts_used=prompts_used,
        max_prompts=max_prompts,
        usage_percent=usage_percent,
        remaining=max(max_prompts - prompts_used, 0),
        is_near_limit=max_prompts > 0 and usage_percent >= NEAR_LIMIT_PERCENT,
        is_at_limit=prompts_used >= max_prompts,
        run_frequency=limits.run_frequency,
    )


def should_display_usage(tier: object, limits: TierQuotas) -> bool:
    """Paid tiers without a hard prompt cap get no usage bar."""
    return resolve_tier(tier) == PlanTier.FREE or limits.max_prompts is not None


def quota_usage_for_tier(tier: object, prompts_used: int) -> QuotaUsage | None:
    """Resolve *tier*, evaluate usage, or return None when not displayed."""
    resolved = resolve_tier(tier)
    limits = get_quotas_for_tier(resolved)
    if not should_display_usage(resolved, limits):
        return None
    return compute_usage(prompts_used, limits, tier=resolved)
