"""Local AI Authority plan gating.

Pure tier-table checks. ``is_local_authority_eligible`` is advisory (UI
rendering); the server-side gate in :mod:`llumos.gating.enforcement` is the
authorization boundary. Ineligible tiers always resolve to zeroed limits,
so a caller that skips the boolean still gets nothing to run.
"""

from __future__ import annotations

from types import MappingProxyType

from llumos.models import GatingResult, LocalAuthorityLimits, PlanTier
from llumos.tiers.quotas import normalize_tier

ELIGIBLE_TIERS: frozenset[PlanTier] = frozenset({
    PlanTier.GROWTH,
    PlanTier.PRO,
    PlanTier.AGENCY,
})

NO_ACCESS_LIMITS = LocalAuthorityLimits()

LOCAL_AUTHORITY_LIMITS: MappingProxyType[PlanTier, LocalAuthorityLimits] = MappingProxyType({
    PlanTier.GROWTH: LocalAuthorityLimits(
        max_profiles=3,
        max_runs_per_day=5,
        max_prompts_per_profile=20,
        models_allowed=("openai", "perplexity"),
    ),
    PlanTier.PRO: LocalAuthorityLimits(
        max_profiles=5,
        max_runs_per_day=10,
        max_prompts_per_profile=50,
        models_allowed=("openai", "perplexity", "gemini"),
    ),
    PlanTier.AGENCY: LocalAuthorityLimits(
        max_profiles=10,
        max_runs_per_day=25,
        max_prompts_per_profile=100,
        models_allowed=("openai", "perplexity", "gemini", "anthropic"),
    ),
})

NO_TIER_REASON = (
    "No subscription tier found. Please subscribe to access Local AI Authority."
)


def is_local_authority_eligible(tier: object) -> bool:
    """True iff *tier* is growth, pro or agency."""
    return normalize_tier(tier) in ELIGIBLE_TIERS


def get_minimum_required_tier() -> PlanTier:
    return PlanTier.GROWTH


def get_ineligible_tier_message(tier: str | None = None) -> str:
    """Upgrade message shown to callers below the minimum tier."""
    tier_display = tier or PlanTier.FREE.value
    return (
        f"Local AI Authority requires a "
        f"{get_minimum_required_tier().value.capitalize()} plan or higher. "
        f"Your current plan is {tier_display}. "
        f"Please upgrade to access this feature."
    )


def get_local_authority_limits(tier: object) -> LocalAuthorityLimits:
    """Limits for *tier*; anything ineligible gets the all-zero record."""
    resolved = normalize_tier(tier)
    if resolved is None:
        return NO_ACCESS_LIMITS
    return LOCAL_AUTHORITY_LIMITS.get(resolved, NO_ACCESS_LIMITS)


def check_local_authority_access(tier: str | None) -> GatingResult:
    """Decide access from a stored subscription tier alone."""
    if not tier or not tier.strip():
        return GatingResult(allowed=False, tier=None, reason=NO_TIER_REASON)

    normalized = tier.strip().lower()
    if not is_local_authority_eligible(normalized):
        return GatingResult(
            allowed=False,
            tier=normalized,
            reason=get_ineligible_tier_message(tier),
        )

    return GatingResult(
        allowed=True,
        tier=normalized,
        limits=get_local_authority_limits(normalized),
    )
