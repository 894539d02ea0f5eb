"""Local AI Authority feature gating.

Advisory checks live in ``plan_gating``; the server-side gate in
``enforcement``.
"""

from llumos.gating.enforcement import gating_error_body, validate_local_authority_access
from llumos.gating.plan_gating import (
    ELIGIBLE_TIERS,
    check_local_authority_access,
    get_ineligible_tier_message,
    get_local_authority_limits,
    get_minimum_required_tier,
    is_local_authority_eligible,
)

__all__ = [
    "ELIGIBLE_TIERS",
    "check_local_authority_access",
    "gating_error_body",
    "get_ineligible_tier_message",
    "get_local_authority_limits",
    "get_minimum_required_tier",
    "is_local_authority_eligible",
    "validate_local_authority_access",
]
