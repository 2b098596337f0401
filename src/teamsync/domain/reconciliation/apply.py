"""Apply team actions against the directory.

Responsibilities of this stage:
- skip additions for users with a pending or an earlier, unanswered invitation
- optionally refuse additions whose identity claim is not trustworthy
- re-verify every name/id pair right before mutating the team
- stop cleanly once the change limit is reached

Remote failures for a single action are logged and counted, never raised.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from teamsync.domain.ports import DirectoryError

from .actions import AddMember, KeepMember, RemoveMember, is_mutating
from .metrics import SyncMetrics

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from teamsync.domain.invitations import InvitationLedger
    from teamsync.domain.model import PendingInvitation, RemoteID, RemoteIdentity, Team
    from teamsync.domain.ports import DirectoryClient
    from teamsync.domain.provenance import ConfidenceScorer

    from .actions import TeamAction

log = getLogger(__name__)


def pending_names(invitations: Iterable[PendingInvitation]) -> frozenset[str]:
    return frozenset(invitation.name.casefold() for invitation in invitations)


@dataclass(slots=True)
class ActionApplier:
    directory: DirectoryClient
    team: Team
    ledger: InvitationLedger
    pending: frozenset[str] = frozenset()
    dry_run: bool = False
    limit: int | None = None
    scorer: ConfidenceScorer | None = None
    metrics: SyncMetrics = field(default_factory=SyncMetrics)

    def apply(self, actions: Mapping[RemoteID, TeamAction]) -> SyncMetrics:
        """Process ``actions`` in ascending id order and return the updated metrics."""

        self.metrics.change_limit = self.limit
        for remote_id in sorted(actions):
            action = actions[remote_id]
            if is_mutating(action) and self._limit_reached():
                log.info(
                    "Hit maximum change limit: changed=%s, limit=%s",
                    self.metrics.changes,
                    self.limit,
                )
                self.metrics.limit_reached = True
                break

            match action:
                case KeepMember(handle=handle):
                    self.metrics.noops += 1
                    log.debug("Keeping %s (%s) on the team", handle, remote_id)
                case AddMember():
                    self._add(action)
                case RemoveMember():
                    self._remove(action)

        log.info(
            "Finished applying actions: dry_run=%s, additions=%s, removals=%s, noops=%s, errors=%s",
            self.dry_run,
            self.metrics.additions,
            self.metrics.removals,
            self.metrics.noops,
            self.metrics.errors,
        )
        return self.metrics

    def _limit_reached(self) -> bool:
        return self.limit is not None and self.metrics.changes >= self.limit

    def _add(self, action: AddMember) -> None:
        identity = action.identity
        if identity.name.casefold() in self.pending:
            self.metrics.noops += 1
            log.debug("%s already has a pending invitation", identity)
            return
        if identity.id in self.ledger:
            self.metrics.noops += 1
            log.debug(
                "%s was invited before and has no pending invitation, assuming it was declined",
                identity,
            )
            return
        if self.scorer is not None:
            confidence = self.scorer.confidence_for(action.handle, identity)
            if confidence is not None and not confidence.trusted:
                self.metrics.untrusted += 1
                log.warning(
                    "Not adding %s for %s: identity claim scored %s",
                    identity,
                    action.handle,
                    confidence,
                )
                return

        self.metrics.additions += 1
        log.info("Adding %s (handle %s) to team %s", identity, action.handle, self.team.name)
        if not self._verify(identity):
            return
        if self.dry_run:
            return

        try:
            self._call(self.directory.add_member, self.team, identity.name)
        except DirectoryError as exc:
            self.metrics.errors += 1
            self.metrics.add_failures += 1
            # the invitation may still have gone out, so the addition stays counted
            log.warning("Failed to add %s to the team: %s", identity, exc)
            return
        self.ledger.add(identity.id)

    def _remove(self, action: RemoveMember) -> None:
        identity = action.identity
        self.metrics.removals += 1
        log.info("Removing %s from team %s", identity, self.team.name)
        if not self._verify(identity):
            return
        if self.dry_run:
            return

        try:
            self._call(self.directory.remove_member, self.team, identity.name)
        except DirectoryError as exc:
            self.metrics.errors += 1
            self.metrics.remove_failures += 1
            log.warning("Failed to remove %s from the team: %s", identity, exc)
            return
        self.ledger.remove(identity.id)

    def _verify(self, identity: RemoteIdentity) -> bool:
        """Check the recorded name still belongs to the recorded id."""

        try:
            found = self._call(self.directory.lookup_user, identity.name)
        except DirectoryError as exc:
            self.metrics.errors += 1
            self.metrics.lookup_failures += 1
            log.warning("Failed to fetch user %s by name: %s", identity.name, exc)
            return False
        if found.id != identity.id:
            self.metrics.username_id_mismatches += 1
            log.warning(
                "Recorded name %s now belongs to id %s, not %s; leaving membership unchanged",
                identity.name,
                found.id,
                identity.id,
            )
            return False
        return True

    def _call[**P, T](self, func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
        self.metrics.directory_calls += 1
        return func(*args, **kwargs)
