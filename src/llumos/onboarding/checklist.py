"""Onboarding checklist completion.

Two items come straight from the organization record, one from a client
flag, and three need a row count each. The counts are independent and run
concurrently.
"""

from __future__ import annotations

import asyncio
from typing import NamedTuple

from llumos.backends.base import RowCounter
from llumos.models import ChecklistItem, OnboardingStatus, OrgSnapshot


class _ItemSpec(NamedTuple):
    id: str
    label: str
    link: str


CHECKLIST_ITEMS: tuple[_ItemSpec, ...] = (
    _ItemSpec("domain", "Verify your domain", "/settings"),
    _ItemSpec("competitor", "Add your top competitor", "/competitors"),
    _ItemSpec("scan", "Run your first AI visibility scan", "/prompts"),
    _ItemSpec("score", "Review your visibility score", "/dashboard"),
    _ItemSpec("prompts", "Add missing prompts", "/prompts"),
    _ItemSpec("report", "Download your AI visibility report", "/dashboard"),
)

PROMPTS_TABLE = "prompts"
RESPONSES_TABLE = "prompt_provider_responses"
SCORES_TABLE = "llumos_scores"


async def check_completion_status(
    counter: RowCounter,
    org: OrgSnapshot,
    report_downloaded: bool = False,
) -> OnboardingStatus:
    """Build the checklist for *org*.

    Raises:
        BackendError: If any of the count queries fails.
    """
    prompts, responses, scores = await asyncio.gather(
        counter.count_rows(PROMPTS_TABLE, "org_id", org.id),
        counter.count_rows(RESPONSES_TABLE, "org_id", org.id),
        counter.count_rows(SCORES_TABLE, "org_id", org.id),
    )

    completed = {
        "domain": org.verified_at is not None,
        "competitor": len(org.competitors) > 0,
        "scan": responses > 0,
        "score": scores > 0,
        "prompts": prompts > 0,
        "report": report_downloaded,
    }
    return OnboardingStatus(items=[
        ChecklistItem(**spec._asdict(), completed=completed[spec.id])
        for spec in CHECKLIST_ITEMS
    ])
