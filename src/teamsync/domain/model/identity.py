"""Identity value objects shared by the reconciliation and provenance code."""

from __future__ import annotations

from dataclasses import dataclass

type Handle = str
type RemoteID = int


def names_match(left: str, right: str) -> bool:
    """Remote account names are compared case-insensitively."""

    return left.casefold() == right.casefold()


@dataclass(frozen=True, slots=True, eq=False)
class RemoteIdentity:
    """An account on the remote directory.

    ``id`` is the canonical join key; ``name`` is the login, which users may
    change and which the directory treats case-insensitively. Two identities
    are equal when their ids are, whatever names they carry.
    """

    name: str
    id: RemoteID

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteIdentity):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


@dataclass(frozen=True, slots=True)
class MaintainerRecord:
    """One entry of the desired membership list."""

    handle: Handle
    name: str | None = None
    id: RemoteID | None = None
    display_name: str | None = None
    email: str | None = None

    @property
    def identity(self) -> RemoteIdentity | None:
        if self.name is None or self.id is None:
            return None
        return RemoteIdentity(name=self.name, id=self.id)


@dataclass(frozen=True, slots=True)
class ActualMember:
    id: RemoteID
    name: str

    @property
    def identity(self) -> RemoteIdentity:
        return RemoteIdentity(name=self.name, id=self.id)


@dataclass(frozen=True, slots=True)
class PendingInvitation:
    name: str


@dataclass(frozen=True, slots=True)
class Team:
    id: int
    name: str
    slug: str | None = None
