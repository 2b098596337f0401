"""Team actions produced by the membership diff."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from teamsync.domain.model import Handle, RemoteIdentity


@dataclass(frozen=True, slots=True)
class AddMember:
    identity: RemoteIdentity
    handle: Handle


@dataclass(frozen=True, slots=True)
class RemoveMember:
    identity: RemoteIdentity


@dataclass(frozen=True, slots=True)
class KeepMember:
    handle: Handle


type TeamAction = AddMember | RemoveMember | KeepMember


def is_mutating(action: TeamAction) -> bool:
    return isinstance(action, AddMember | RemoveMember)
