"""Dismiss stale pull request approvals on GitHub."""

__version__ = "0.1.0"
