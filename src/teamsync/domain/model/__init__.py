"""Domain model for team membership and identity claims."""

from __future__ import annotations

from .enums import Confidence, DirectoryErrorKind
from .identity import (
    ActualMember,
    Handle,
    MaintainerRecord,
    PendingInvitation,
    RemoteID,
    RemoteIdentity,
    Team,
    names_match,
)

__all__ = [
    "ActualMember",
    "Confidence",
    "DirectoryErrorKind",
    "Handle",
    "MaintainerRecord",
    "PendingInvitation",
    "RemoteID",
    "RemoteIdentity",
    "Team",
    "names_match",
]
