"""Core data models for Llumos.

Defines the schemas for:
- Plan tiers and their quotas
- Quota usage (what the usage bar shows)
- Local AI Authority limits and gating results
- Subscriber rows read from the backend
- Domain validation results
- Onboarding checklist status
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums ---


class PlanTier(enum.StrEnum):
    FREE = "free"
    STARTER = "starter"
    GROWTH = "growth"
    PRO = "pro"
    AGENCY = "agency"


class RunFrequency(enum.StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"


class DomainErrorType(enum.StrEnum):
    EMAIL = "email"
    INVALID_PATTERN = "invalid_pattern"
    NO_TLD = "no_tld"
    TOO_SHORT = "too_short"
    GIBBERISH = "gibberish"


# --- Tier catalog ---


class TierQuotas(BaseModel):
    """Usage ceilings for a plan tier.

    ``max_prompts`` is only set for the free tier, where it is a hard cap on
    tracked prompts. When unset, ``prompts_per_day`` is the ceiling.
    """

    model_config = ConfigDict(frozen=True)

    prompts_per_day: int = Field(..., ge=0)
    providers_per_prompt: int = Field(..., ge=0)
    max_users: int = Field(..., ge=0)
    max_brands: int = Field(..., ge=0)
    max_prompts: int | None = Field(default=None, ge=0)
    run_frequency: RunFrequency = RunFrequency.DAILY

    @property
    def effective_max_prompts(self) -> int:
        """The prompt ceiling the usage bar is measured against."""
        if self.max_prompts is not None:
            return self.max_prompts
        return self.prompts_per_day


class QuotaUsage(BaseModel):
    """Evaluated prompt usage against a tier's ceiling."""

    tier: PlanTier
    prompts_used: int
    max_prompts: int
    usage_percent: float
    remaining: int
    is_near_limit: bool
    is_at_limit: bool
    run_frequency: RunFrequency


class PlanPrice(BaseModel):
    """List price for a paid tier, in whole US dollars."""

    model_config = ConfigDict(frozen=True)

    monthly: int = Field(..., ge=0)
    yearly: int = Field(..., ge=0)


# --- Local AI Authority ---


class LocalAuthorityLimits(BaseModel):
    """Per-tier limits for the Local AI Authority feature.

    Ineligible tiers get all zeros and no models, which disables the
    feature even for callers that ignore the eligibility flag.
    """

    model_config = ConfigDict(frozen=True)

    max_profiles: int = Field(0, ge=0)
    max_runs_per_day: int = Field(0, ge=0)
    max_prompts_per_profile: int = Field(0, ge=0)
    models_allowed: tuple[str, ...] = ()


class GatingResult(BaseModel):
    """Outcome of a Local AI Authority access check. Never persisted."""

    allowed: bool
    tier: str | None = None
    reason: str | None = None
    limits: LocalAuthorityLimits | None = None


class Subscriber(BaseModel):
    """The slice of a ``subscribers`` row the gate reads."""

    subscription_tier: str | None = None
    subscribed: bool = False
    payment_collected: bool = False

    @field_validator("subscribed", "payment_collected", mode="before")
    @classmethod
    def _null_is_false(cls, v: object) -> object:
        return False if v is None else v

    @property
    def is_active(self) -> bool:
        return self.subscribed and self.payment_collected


class AuthenticatedUser(BaseModel):
    """A caller resolved from a bearer token."""

    id: str
    email: str | None = None
    role: str | None = None


# --- Domain validation ---


class DomainValidationResult(BaseModel):
    """Result of checking a website domain entered in a form."""

    is_valid: bool
    cleaned_domain: str
    warning: str | None = None
    error_type: DomainErrorType | None = None


# --- Onboarding ---


class OrgSnapshot(BaseModel):
    """Organization fields the onboarding checklist needs."""

    id: str
    verified_at: datetime | None = None
    competitors: list[str] = Field(default_factory=list)


class ChecklistItem(BaseModel):
    id: str
    label: str
    link: str
    completed: bool = False


class OnboardingStatus(BaseModel):
    """Aggregated onboarding progress for an organization."""

    items: list[ChecklistItem]

    @property
    def completed_count(self) -> int:
        return sum(1 for item in self.items if item.completed)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def progress_percent(self) -> float:
        if not self.items:
            return 0.0
        return self.completed_count / self.total * 100

    @property
    def all_completed(self) -> bool:
        return all(item.completed for item in self.items)
