from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from .client import GitHubClient
from .models import PullRequestRef

log = logging.getLogger(__name__)


def dry_run_comment(count: int, reason: str) -> str:
    return f"dismiss_stale_approvals dry run: Would have dismissed {count} approvals with reason:\n\n{reason}"


async def dismiss_approvals(
    client: GitHubClient,
    pr: PullRequestRef,
    approval_ids: Sequence[int],
    reason: str,
    dry_run: bool = False,
) -> int:
    """Dismiss ``approval_ids`` on ``pr``, or report them in a comment when ``dry_run``.

    Dismissals are issued concurrently and every one of them runs to
    completion. If any failed, the failure of the earliest id in
    ``approval_ids`` is raised afterwards; dismissals that went through stay
    dismissed. Returns the number of approvals acted on.
    """
    if not approval_ids:
        return 0

    if dry_run:
        await client.create_comment(pr, dry_run_comment(len(approval_ids), reason))
        log.debug("Posted dry-run comment on %s for %d approvals", pr, len(approval_ids))
        return len(approval_ids)

    results = await asyncio.gather(
        *(client.dismiss_review(pr, review_id, reason) for review_id in approval_ids),
        return_exceptions=True,
    )
    failures = [result for result in results if isinstance(result, BaseException)]
    if failures:
        log.debug("%d of %d dismissals failed on %s", len(failures), len(approval_ids), pr)
        raise failures[0]
    log.debug("Dismissed reviews %s on %s", ", ".join(map(str, approval_ids)), pr)
    return len(approval_ids)
