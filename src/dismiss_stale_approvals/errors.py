from __future__ import annotations


class DismissStaleApprovalsError(Exception):
    """Base exception for dismiss-stale-approvals."""


class MissingContext(DismissStaleApprovalsError):
    """The trigger context does not identify a pull request."""


class MissingRequiredInput(DismissStaleApprovalsError):
    """A required action input is absent or blank."""


class InvalidInput(DismissStaleApprovalsError):
    """An action input has a value that cannot be interpreted."""


class RemoteServiceError(DismissStaleApprovalsError):
    """A GitHub API call failed, either at the HTTP or the transport level."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
