from __future__ import annotations

import logging
from collections.abc import Iterable

from .client import GitHubClient, has_next_page
from .models import PullRequestRef, ReviewApproval

APPROVED = "APPROVED"

log = logging.getLogger(__name__)


async def collect_approvals(client: GitHubClient, pr: PullRequestRef) -> list[ReviewApproval]:
    """Fetch every approving review on ``pr``, one page at a time, in API order."""
    approvals: list[ReviewApproval] = []
    page = 1
    while True:
        reviews, response = await client.list_reviews(pr, page)
        approvals.extend(
            ReviewApproval(id=review["id"], commit_id=review.get("commit_id"))
            for review in reviews
            if review.get("state") == APPROVED
        )
        log.debug("Fetched reviews page %d for %s (%d approvals so far)", page, pr, len(approvals))
        if not has_next_page(response):
            break
        page += 1
    return approvals


def filter_approvals(
    approvals: Iterable[ReviewApproval],
    excluding_shas: frozenset[str],
) -> list[ReviewApproval]:
    """Drop approvals made on an excluded commit. Approvals without a commit are kept."""
    if not excluding_shas:
        return list(approvals)
    return [
        approval
        for approval in approvals
        if approval.commit_id is None or approval.commit_id not in excluding_shas
    ]


def parse_excluding_shas(raw: str | None) -> frozenset[str]:
    if not raw:
        return frozenset()
    return frozenset(sha.strip() for sha in raw.split(",") if sha.strip())
