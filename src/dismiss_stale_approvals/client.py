from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import RemoteServiceError
from .models import PullRequestRef

log = logging.getLogger(__name__)


class GitHubClient:
    """Thin async wrapper over the three GitHub REST calls the run needs.

    Errors are never retried: any HTTP status >= 400 or transport failure is
    raised as :class:`RemoteServiceError`.
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=httpx.Timeout(30.0),
            transport=transport,
        )

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise RemoteServiceError(f"Request to GitHub failed: {exc}") from exc

        if response.is_error:
            raise RemoteServiceError(
                f"GitHub API returned HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    async def list_reviews(self, pr: PullRequestRef, page: int) -> tuple[list[dict[str, Any]], httpx.Response]:
        response = await self.request(
            "GET",
            f"/repos/{pr.owner}/{pr.repo}/pulls/{pr.number}/reviews",
            params={"page": page},
        )
        return response.json(), response

    async def create_comment(self, pr: PullRequestRef, body: str) -> dict[str, Any]:
        response = await self.request(
            "POST",
            f"/repos/{pr.owner}/{pr.repo}/issues/{pr.number}/comments",
            json={"body": body},
        )
        return response.json()

    async def dismiss_review(self, pr: PullRequestRef, review_id: int, message: str) -> dict[str, Any]:
        response = await self.request(
            "PUT",
            f"/repos/{pr.owner}/{pr.repo}/pulls/{pr.number}/reviews/{review_id}/dismissals",
            json={"message": message, "event": "DISMISS"},
        )
        return response.json()


def has_next_page(response: httpx.Response) -> bool:
    """True when the response's Link header advertises a ``rel="next"`` page."""
    if not response.headers.get("link"):
        return False
    return "next" in response.links


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return response.text
