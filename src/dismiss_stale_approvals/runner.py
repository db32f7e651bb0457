"""The single place where a run's errors are caught and turned into a result."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from .approvals import collect_approvals, filter_approvals
from .client import GitHubClient
from .context import load_context
from .dismiss import dismiss_approvals
from .models import ActionContext, RunResult

log = logging.getLogger(__name__)

ClientFactory = Callable[[ActionContext], GitHubClient]


def default_client(context: ActionContext) -> GitHubClient:
    return GitHubClient(context.token, api_url=context.api_url)


async def dismiss_stale_approvals(
    context: ActionContext,
    client_factory: ClientFactory = default_client,
) -> int:
    pr = context.pull_request
    async with client_factory(context) as client:
        approvals = await collect_approvals(client, pr)
        remaining = filter_approvals(approvals, context.excluding_shas)
        log.info(
            "%s: %d approvals, %d after excluding %d commits",
            pr,
            len(approvals),
            len(remaining),
            len(context.excluding_shas),
        )
        return await dismiss_approvals(
            client,
            pr,
            [approval.id for approval in remaining],
            context.reason,
            dry_run=context.dry_run,
        )


def run(
    env: Mapping[str, str] | None = None,
    client_factory: ClientFactory = default_client,
    **overrides: Any,
) -> RunResult:
    """Load the context, then collect, filter and dismiss.

    Never raises an :class:`Exception`; failures come back as
    ``RunResult(ok=False, error=...)``.
    """
    try:
        context = load_context(env, **overrides)
        count = asyncio.run(dismiss_stale_approvals(context, client_factory))
    except Exception as exc:
        log.debug("Run failed", exc_info=True)
        return RunResult(ok=False, error=str(exc) or type(exc).__name__)
    return RunResult(ok=True, dismissed=count, dry_run=context.dry_run)
