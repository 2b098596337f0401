"""Team membership reconciliation.

Flow of one run:
1) diff the desired maintainer list against the current team members
2) apply the resulting actions in id order, gated by pending invitations,
   the invitation ledger, the change limit and (optionally) provenance
"""

from __future__ import annotations

from .actions import AddMember, KeepMember, RemoveMember, TeamAction, is_mutating
from .apply import ActionApplier, pending_names
from .diff import maintainer_team_diff
from .metrics import SyncMetrics

__all__ = [
    "ActionApplier",
    "AddMember",
    "KeepMember",
    "RemoveMember",
    "SyncMetrics",
    "TeamAction",
    "is_mutating",
    "maintainer_team_diff",
    "pending_names",
]
