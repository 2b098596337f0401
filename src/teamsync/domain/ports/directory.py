"""Port for the remote team directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from teamsync.domain.model import DirectoryErrorKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from teamsync.domain.model import ActualMember, PendingInvitation, RemoteIdentity, Team


class DirectoryError(RuntimeError):
    """Raised by directory adapters when a remote call fails."""

    def __init__(self, message: str, *, kind: DirectoryErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


@runtime_checkable
class DirectoryClient(Protocol):
    """Team and user operations against the remote identity service."""

    def get_team(self, team_id: int) -> Team: ...

    def list_teams(self, organization: str) -> Sequence[Team]: ...

    def list_members(self, team: Team) -> Sequence[ActualMember]: ...

    def list_pending_invitations(self, organization: str) -> Sequence[PendingInvitation]: ...

    def lookup_user(self, name: str) -> RemoteIdentity: ...

    def add_member(self, team: Team, name: str) -> None: ...

    def remove_member(self, team: Team, name: str) -> None: ...
