"""Llumos: plan tiers, quotas and feature gating for AI visibility tracking."""

__version__ = "0.1.0"

from llumos.backends.base import (
    AuthProvider,
    BackendError,
    RowCounter,
    SubscriptionLookupError,
    SubscriptionStore,
)
from llumos.backends.memory import InMemoryBackend
from llumos.cms.crypto import CmsCipher, CmsDecryptError, CmsError, CmsKeyError
from llumos.config import LlumosConfig, find_config, load_config
from llumos.gating.enforcement import validate_local_authority_access
from llumos.gating.plan_gating import (
    get_ineligible_tier_message,
    get_local_authority_limits,
    is_local_authority_eligible,
)
from llumos.models import (
    GatingResult,
    LocalAuthorityLimits,
    PlanTier,
    QuotaUsage,
    RunFrequency,
    Subscriber,
    TierQuotas,
)
from llumos.tiers.quotas import get_quotas_for_tier
from llumos.tiers.usage import compute_usage, quota_usage_for_tier
from llumos.validation.domain import validate_domain

__all__ = [
    "AuthProvider",
    "BackendError",
    "CmsCipher",
    "CmsDecryptError",
    "CmsError",
    "CmsKeyError",
    "GatingResult",
    "InMemoryBackend",
    "LlumosConfig",
    "LocalAuthorityLimits",
    "PlanTier",
    "QuotaUsage",
    "RowCounter",
    "RunFrequency",
    "Subscriber",
    "SubscriptionLookupError",
    "SubscriptionStore",
    "TierQuotas",
    "compute_usage",
    "find_config",
    "get_ineligible_tier_message",
    "get_local_authority_limits",
    "get_quotas_for_tier",
    "is_local_authority_eligible",
    "load_config",
    "quota_usage_for_tier",
    "validate_domain",
    "validate_local_authority_access",
    "__version__",
]
