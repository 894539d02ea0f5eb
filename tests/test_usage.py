"""Tests for the quota evaluator."""

import pytest

from llumos.models import PlanTier, RunFrequency, TierQuotas
from llumos.tiers.quotas import get_quotas_for_tier
from llumos.tiers.usage import compute_usage, quota_usage_for_tier, should_display_usage

FREE = get_quotas_for_tier("free")


class TestComputeUsage:
    def test_near_limit_at_80_percent(self):
        usage = compute_usage(4, FREE)
        assert usage.usage_percent == 80
        assert usage.is_near_limit is True
        assert usage.is_at_limit is False
        assert usage.remaining == 1

    def test_at_limit(self):
        usage = compute_usage(5, FREE)
        assert usage.is_at_limit is True
        assert usage.remaining == 0
        assert usage.usage_percent == 100

    def test_over_limit_is_clamped(self):
        usage = compute_usage(7, FREE)
        assert usage.usage_percent == 100
        assert usage.remaining == 0
        assert usage.is_at_limit is True

    def test_below_threshold(self):
        usage = compute_usage(3, FREE)
        assert usage.usage_percent == 60
        assert usage.is_near_limit is False
        assert usage.is_at_limit is False

    def test_zero_used(self):
        usage = compute_usage(0, FREE)
        assert usage.usage_percent == 0
        assert usage.remaining == 5

    def test_paid_tier_uses_daily_rate(self):
        usage = compute_usage(50, get_quotas_for_tier("growth"), tier=PlanTier.GROWTH)
        assert usage.max_prompts == 100
        assert usage.usage_percent == 50
        assert usage.run_frequency == RunFrequency.DAILY

    def test_pure(self):
        assert compute_usage(4, FREE) == compute_usage(4, FREE)

    def test_negative_usage_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            compute_usage(-1, FREE)


class TestZeroCeiling:
    def test_zero_ceiling_is_at_limit_with_zero_percent(self):
        limits = TierQuotas(
            prompts_per_day=0, providers_per_prompt=0, max_users=0, max_brands=0,
        )
        usage = compute_usage(0, limits)
        assert usage.usage_percent == 0.0
        assert usage.is_at_limit is True
        assert usage.is_near_limit is False
        assert usage.remaining == 0

    def test_zero_cap_overrides_daily_rate(self):
        limits = TierQuotas(
            prompts_per_day=10, providers_per_prompt=1, max_users=1,
            max_brands=1, max_prompts=0,
        )
        usage = compute_usage(3, limits)
        assert usage.max_prompts == 0
        assert usage.usage_percent == 0.0
        assert usage.is_at_limit is True


class TestDisplaySuppression:
    def test_free_tier_shows_bar(self):
        assert should_display_usage("free", FREE) is True

    @pytest.mark.parametrize("tier", ["starter", "growth", "pro", "agency"])
    def test_paid_tiers_hide_bar(self, tier):
        assert quota_usage_for_tier(tier, 10) is None

    def test_paid_tier_with_cap_shows_bar(self):
        capped = TierQuotas(
            prompts_per_day=100, providers_per_prompt=4, max_users=3,
            max_brands=3, max_prompts=50,
        )
        assert should_display_usage("growth", capped) is True

    def test_free_usage(self):
        usage = quota_usage_for_tier("free", 4)
        assert usage is not None
        assert usage.tier == PlanTier.FREE
        assert usage.is_near_limit is True

    def test_unknown_tier_treated_as_free(self):
        usage = quota_usage_for_tier("mystery", 5)
        assert usage is not None
        assert usage.tier == PlanTier.FREE
        assert usage.is_at_limit is True
