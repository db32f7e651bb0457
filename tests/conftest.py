"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from dismiss_stale_approvals.models import ActionContext, PullRequestRef

API = "https://api.github.com"
REVIEWS_URL = f"{API}/repos/owner/repo/pulls/7/reviews"
COMMENTS_URL = f"{API}/repos/owner/repo/issues/7/comments"


def dismissal_url(review_id: int) -> str:
    return f"{REVIEWS_URL}/{review_id}/dismissals"


# ---------------------------------------------------------------------------
# REST payload factories — return raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def review_node(
    id: int = 1,
    state: str = "APPROVED",
    commit_id: str | None = "a" * 40,
    login: str = "reviewer",
) -> dict:
    return {
        "id": id,
        "node_id": f"PRR_{id}",
        "user": {"login": login},
        "body": "",
        "state": state,
        "commit_id": commit_id,
        "html_url": f"https://github.com/owner/repo/pull/7#pullrequestreview-{id}",
    }


def link_header(page: int, last: int) -> str:
    links = []
    if page < last:
        links.append(f'<{REVIEWS_URL}?page={page + 1}>; rel="next"')
        links.append(f'<{REVIEWS_URL}?page={last}>; rel="last"')
    if page > 1:
        links.append(f'<{REVIEWS_URL}?page=1>; rel="first"')
        links.append(f'<{REVIEWS_URL}?page={page - 1}>; rel="prev"')
    return ", ".join(links)


def reviews_response(reviews: list[dict], page: int = 1, last: int = 1) -> httpx.Response:
    headers = {}
    if last > 1:
        headers["Link"] = link_header(page, last)
    return httpx.Response(200, json=reviews, headers=headers)


def paged_reviews(pages: list[list[dict]]):
    """respx side effect serving ``pages`` by the ``page`` query parameter."""

    def side_effect(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        return reviews_response(pages[page - 1], page=page, last=len(pages))

    return side_effect


def pull_request_event(number: int = 7, full_name: str = "owner/repo") -> dict:
    return {
        "action": "synchronize",
        "number": number,
        "pull_request": {"number": number, "head": {"sha": "b" * 40}},
        "repository": {"full_name": full_name},
    }


def write_event(tmp_path: Path, payload: dict) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def action_env(event_path: Path | None = None, **inputs: str) -> dict[str, str]:
    env = {
        "GITHUB_REPOSITORY": "owner/repo",
        "INPUT_GITHUB-TOKEN": "tok",
        "INPUT_REASON": "Stale approval",
    }
    if event_path is not None:
        env["GITHUB_EVENT_PATH"] = str(event_path)
    for name, value in inputs.items():
        env[f"INPUT_{name.replace('_', '-').upper()}"] = value
    return env


# ---------------------------------------------------------------------------
# Model object factories
# ---------------------------------------------------------------------------


def make_pr(number: int = 7) -> PullRequestRef:
    return PullRequestRef(owner="owner", repo="repo", number=number)


def make_context(
    reason: str = "Stale approval",
    excluding_shas: frozenset[str] = frozenset(),
    dry_run: bool = False,
) -> ActionContext:
    return ActionContext(
        token="tok",
        reason=reason,
        pull_request=make_pr(),
        excluding_shas=excluding_shas,
        dry_run=dry_run,
    )


# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    """Keep the runner's own GitHub Actions variables out of the tests."""
    for name in (
        "GITHUB_ACTIONS",
        "GITHUB_API_URL",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
        "GITHUB_TOKEN",
        "INPUT_GITHUB-TOKEN",
        "INPUT_REASON",
        "INPUT_EXCLUDING-SHAS",
        "INPUT_DRY-RUN",
    ):
        monkeypatch.delenv(name, raising=False)
