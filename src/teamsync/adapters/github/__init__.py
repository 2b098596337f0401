"""GitHub directory adapter."""

from __future__ import annotations

from .client import GitHubClient
from .schema import GitHubCommit, GitHubInvitation, GitHubTeam, GitHubUser

__all__ = [
    "GitHubClient",
    "GitHubCommit",
    "GitHubInvitation",
    "GitHubTeam",
    "GitHubUser",
]
