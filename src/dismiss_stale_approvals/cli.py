from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .models import RunResult
from .runner import run

_stderr = Console(stderr=True)

PERMISSIONS_HINT = "Did you set the correct permissions?"


load_dotenv()


def _escape_command_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _workflow_command(command: str, message: str) -> None:
    if os.environ.get("GITHUB_ACTIONS") == "true":
        click.echo(f"::{command}::{_escape_command_data(message)}")


def report(result: RunResult) -> int:
    """Print the outcome of a run and return the process exit code."""
    if result.ok:
        if result.dismissed == 0:
            _stderr.print("[green]No approvals to dismiss.[/green]")
        elif result.dry_run:
            _stderr.print(f"[green]Dry run: reported {result.dismissed} approvals that would be dismissed.[/green]")
        else:
            _stderr.print(f"[green]Dismissed {result.dismissed} approvals.[/green]")
        return 0

    message = result.error or "Unknown error"
    if "Not Found" in message:
        _stderr.print(f"[yellow]Warning:[/yellow] {PERMISSIONS_HINT}")
        _workflow_command("warning", PERMISSIONS_HINT)
    _stderr.print(f"[red]Error:[/red] {escape(message)}")
    _workflow_command("error", message)
    return 1


@click.command()
@click.option(
    "--token",
    default=None,
    help="GitHub token. Defaults to the github-token input, then GITHUB_TOKEN.",
)
@click.option("--reason", default=None, help="Message attached to each dismissal. Defaults to the reason input.")
@click.option(
    "--excluding-shas",
    default=None,
    help="Comma-separated commit SHAs whose approvals are kept.",
)
@click.option(
    "--dry-run/--no-dry-run",
    default=None,
    help="Comment with what would be dismissed instead of dismissing.",
)
@click.option("--repo", "repository", metavar="OWNER/REPO", default=None, help="Defaults to GITHUB_REPOSITORY.")
@click.option(
    "--pr",
    "pr_number",
    type=click.IntRange(min=1),
    default=None,
    help="Pull request number. Defaults to the one in the trigger event.",
)
@click.option(
    "--event-path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Trigger event payload. Defaults to GITHUB_EVENT_PATH.",
)
@click.option("--api-url", default=None, help="GitHub API base URL. Defaults to GITHUB_API_URL.")
@click.option("--verbose", "-v", is_flag=True, help="Log each API step.")
def cli(
    token: str | None,
    reason: str | None,
    excluding_shas: str | None,
    dry_run: bool | None,
    repository: str | None,
    pr_number: int | None,
    event_path: Path | None,
    api_url: str | None,
    verbose: bool,
) -> None:
    """Dismiss approving reviews on a pull request, except those on excluded commits."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=_stderr, show_time=False, show_path=False)],
        force=True,
    )

    result = run(
        token=token,
        reason=reason,
        excluding_shas=excluding_shas,
        dry_run=dry_run,
        repository=repository,
        pr_number=pr_number,
        event_path=event_path,
        api_url=api_url,
    )
    sys.exit(report(result))
