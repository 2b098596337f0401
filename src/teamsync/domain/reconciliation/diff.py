"""Desired-vs-actual membership diff."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .actions import AddMember, KeepMember, RemoveMember

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from teamsync.domain.model import ActualMember, Handle, MaintainerRecord, RemoteID

    from .actions import TeamAction
    from .metrics import SyncMetrics


def maintainer_team_diff(
    maintainers: Mapping[Handle, MaintainerRecord],
    members: Iterable[ActualMember],
    *,
    metrics: SyncMetrics | None = None,
) -> dict[RemoteID, TeamAction]:
    """Return exactly one action per id known on either side.

    Maintainers without a recorded id cannot be joined against the team and
    are left out until their id is backfilled.
    """

    current = {member.id: member for member in members}
    diff: dict[RemoteID, TeamAction] = {}

    for handle, maintainer in maintainers.items():
        if maintainer.name is None and metrics is not None:
            metrics.maintainers_missing_name += 1
        if maintainer.id is None:
            if metrics is not None:
                metrics.maintainers_missing_id += 1
            continue

        if maintainer.id in current:
            diff[maintainer.id] = KeepMember(handle=handle)
        elif maintainer.identity is not None:
            diff[maintainer.id] = AddMember(identity=maintainer.identity, handle=handle)

    for member_id, member in current.items():
        # everyone still on the team that nobody asked for
        if member_id not in diff:
            diff[member_id] = RemoveMember(identity=member.identity)

    return diff
