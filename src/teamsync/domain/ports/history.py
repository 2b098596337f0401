"""Ports for revision metadata used by provenance checks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from teamsync.domain.model import RemoteIdentity


@runtime_checkable
class CommitAuthorLookup(Protocol):
    """Resolve the account that authored a revision.

    Returns ``None`` when the revision exists but is not linked to an account;
    raises ``DirectoryError`` when it cannot be fetched.
    """

    def get_commit_author(self, revision: str) -> RemoteIdentity | None: ...
