"""Public plan catalog and form helpers (no auth)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from edge.responses import read_json_body
from llumos.gating.plan_gating import get_local_authority_limits, is_local_authority_eligible
from llumos.models import DomainValidationResult, PlanTier
from llumos.tiers.pricing import get_plan_price
from llumos.tiers.quotas import TIER_QUOTAS, normalize_tier
from llumos.validation.domain import validate_domain

router = APIRouter(tags=["catalog"])


def _tier_entry(tier: PlanTier) -> dict[str, Any]:
    price = get_plan_price(tier)
    return {
        "tier": tier.value,
        "quotas": TIER_QUOTAS[tier].model_dump(mode="json", exclude_none=True),
        "price": price.model_dump() if price else None,
        "local_authority_eligible": is_local_authority_eligible(tier),
        "local_authority_limits": get_local_authority_limits(tier).model_dump(mode="json"),
    }


@router.get("/tiers")
def list_tiers() -> list[dict[str, Any]]:
    return [_tier_entry(tier) for tier in TIER_QUOTAS]


@router.get("/tiers/{tier}")
def get_tier(tier: str) -> dict[str, Any]:
    resolved = normalize_tier(tier)
    if resolved is None:
        raise HTTPException(status_code=404, detail=f"Unknown tier: {tier}")
    return _tier_entry(resolved)


@router.post("/validate-domain", response_model=DomainValidationResult)
async def validate_domain_endpoint(request: Request) -> DomainValidationResult:
    body = await read_json_body(request)
    domain = body.get("domain")
    return validate_domain(domain if isinstance(domain, str) else None)
