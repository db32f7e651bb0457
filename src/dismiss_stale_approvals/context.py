"""Load the run configuration from GitHub Actions inputs and the trigger event.

Inputs arrive as ``INPUT_<NAME>`` environment variables and the trigger
payload as a JSON file named by ``GITHUB_EVENT_PATH``. Everything is resolved
once, here, into an :class:`ActionContext` that the rest of the run receives
explicitly.
"""
from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .approvals import parse_excluding_shas
from .errors import InvalidInput, MissingContext, MissingRequiredInput
from .models import ActionContext, PullRequestRef

DEFAULT_API_URL = "https://api.github.com"

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")

log = logging.getLogger(__name__)


def _input_variable(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(env: Mapping[str, str], name: str, required: bool = False) -> str:
    value = env.get(_input_variable(name), "").strip()
    if required and not value:
        raise MissingRequiredInput(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    value = get_input(env, name)
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidInput(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def load_event(env: Mapping[str, str], event_path: Path | None = None) -> dict[str, Any]:
    """Return the trigger payload, or an empty dict when none is available."""
    if event_path is None:
        raw = env.get("GITHUB_EVENT_PATH")
        if not raw:
            return {}
        event_path = Path(raw)
    if not event_path.is_file():
        log.warning("GITHUB_EVENT_PATH %s does not exist", event_path)
        return {}
    return json.loads(event_path.read_text(encoding="utf-8"))


def parse_repository(value: str) -> tuple[str, str]:
    if value.count("/") != 1:
        raise MissingContext(f"{value!r} is not a valid OWNER/REPO repository.")
    owner, repo = value.split("/", 1)
    if not owner or not repo:
        raise MissingContext(f"{value!r} is not a valid OWNER/REPO repository.")
    return owner, repo


def resolve_pull_request(
    env: Mapping[str, str],
    payload: dict[str, Any],
    repository: str | None = None,
    pr_number: int | None = None,
) -> PullRequestRef:
    if pr_number is None:
        pr = payload.get("pull_request")
        if not pr:
            raise MissingContext(
                "event context does not contain pull request data - "
                "ensure this action was triggered on a `pull_request` event"
            )
        pr_number = pr["number"]

    if repository is None:
        repository = env.get("GITHUB_REPOSITORY") or (payload.get("repository") or {}).get("full_name")
    if not repository:
        raise MissingContext("Could not determine the repository: set GITHUB_REPOSITORY or pass --repo.")

    owner, repo = parse_repository(repository)
    return PullRequestRef(owner=owner, repo=repo, number=int(pr_number))


def load_context(
    env: Mapping[str, str] | None = None,
    *,
    token: str | None = None,
    reason: str | None = None,
    excluding_shas: str | None = None,
    dry_run: bool | None = None,
    repository: str | None = None,
    pr_number: int | None = None,
    event_path: Path | None = None,
    api_url: str | None = None,
) -> ActionContext:
    """Build the run context.

    Explicit arguments win over action inputs; action inputs win over
    defaults. ``GITHUB_TOKEN`` is only consulted when no token was given
    either way. Fails before anything touches the network.
    """
    if env is None:
        env = os.environ

    token = token or get_input(env, "github-token") or env.get("GITHUB_TOKEN", "").strip()
    if not token:
        raise MissingRequiredInput("Input required and not supplied: github-token")
    pull_request = resolve_pull_request(env, load_event(env, event_path), repository, pr_number)
    reason = reason or get_input(env, "reason", required=True)
    if excluding_shas is None:
        excluding_shas = get_input(env, "excluding-shas")
    if dry_run is None:
        dry_run = get_boolean_input(env, "dry-run")

    return ActionContext(
        token=token,
        reason=reason,
        pull_request=pull_request,
        excluding_shas=parse_excluding_shas(excluding_shas),
        dry_run=dry_run,
        api_url=(api_url or env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
    )
