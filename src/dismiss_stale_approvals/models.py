from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReviewApproval:
    id: int
    commit_id: str | None


@dataclass(frozen=True)
class PullRequestRef:
    owner: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass(frozen=True)
class ActionContext:
    token: str
    reason: str
    pull_request: PullRequestRef
    excluding_shas: frozenset[str] = field(default_factory=frozenset)
    dry_run: bool = False
    api_url: str = "https://api.github.com"


@dataclass(frozen=True)
class RunResult:
    ok: bool
    dismissed: int = 0
    dry_run: bool = False
    error: str | None = None
