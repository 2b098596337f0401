"""Application orchestration entry points."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from teamsync.adapters.github import GitHubClient
from teamsync.adapters.nix import load_history, load_maintainers
from teamsync.config import SyncConfig, bundled_history_dir, get_github_config
from teamsync.domain.backfill import backfill_file
from teamsync.domain.handles import HandleReport, check_handles
from teamsync.domain.invitations import InvitationLedger
from teamsync.domain.ports import DirectoryError
from teamsync.domain.provenance import ConfidenceScorer, ProvenanceResolver
from teamsync.domain.reconciliation import (
    ActionApplier,
    SyncMetrics,
    maintainer_team_diff,
    pending_names,
)

if TYPE_CHECKING:
    from pathlib import Path

    from teamsync.domain.model import Confidence, RemoteID, Team
    from teamsync.domain.ports import CommitAuthorLookup, DirectoryClient


log = getLogger(__name__)


@dataclass(slots=True)
class ProvenanceReport:
    """Tally of confidence verdicts over every fully identified maintainer."""

    confidence: Counter[Confidence] = field(default_factory=Counter)
    unresolved: int = 0


def _github_client(credentials_file: Path | None) -> GitHubClient:
    return GitHubClient(config=get_github_config(credentials_file=credentials_file))


def sync_team(
    *,
    maintainers_file: Path,
    organization: str,
    team_id: int,
    settings: SyncConfig | None = None,
    credentials_file: Path | None = None,
    directory: DirectoryClient | None = None,
    commits: CommitAuthorLookup | None = None,
    metrics: SyncMetrics | None = None,
) -> SyncMetrics:
    """Bring the team's membership in line with the maintainer list.

    Failing to load the maintainer list, the invitation ledger or the team
    snapshot aborts the run; failures of individual changes only show up in
    the returned metrics.
    """

    settings = settings or SyncConfig()
    metrics = metrics or SyncMetrics()
    maintainers = load_maintainers(maintainers_file)

    ledger = (
        InvitationLedger.load(settings.invited_list)
        if settings.invited_list is not None
        else InvitationLedger()
    )

    owned: GitHubClient | None = None
    if directory is None:
        directory = owned = _github_client(credentials_file)
    try:
        metrics.directory_calls += 1
        team = directory.get_team(team_id)
        log.info("Syncing team %s (%s)", team.name, team.id)

        log.info("Fetching current members of %s", team.name)
        metrics.directory_calls += 1
        members = directory.list_members(team)
        metrics.team_members = len(members)

        log.debug("Fetching existing invitations")
        metrics.directory_calls += 1
        invitations = directory.list_pending_invitations(organization)
        metrics.pending_invitations = len(invitations)
        log.debug("Fetched %s pending invitations", len(invitations))

        actions = maintainer_team_diff(maintainers, members, metrics=metrics)

        scorer = None
        if settings.verify_provenance:
            if commits is None:
                commits = owned = owned or _github_client(credentials_file)
            sources = load_history(maintainers_file, settings.resolve_history_dir())
            scorer = ConfidenceScorer(resolver=ProvenanceResolver(sources), commits=commits)

        applier = ActionApplier(
            directory=directory,
            team=team,
            ledger=ledger,
            pending=pending_names(invitations),
            dry_run=settings.dry_run,
            limit=settings.limit,
            scorer=scorer,
            metrics=metrics,
        )
        try:
            applier.apply(actions)
        finally:
            # invitations already sent must be remembered even if the run dies here
            if settings.invited_list is not None:
                ledger.save(settings.invited_list)
    finally:
        if owned is not None:
            owned.close()

    log.info(
        "Finished syncing team %s: additions=%s, removals=%s, noops=%s, errors=%s",
        team_id,
        metrics.additions,
        metrics.removals,
        metrics.noops,
        metrics.errors,
    )
    return metrics


def list_teams(
    *,
    organization: str,
    credentials_file: Path | None = None,
    directory: DirectoryClient | None = None,
) -> list[Team]:
    if directory is not None:
        return list(directory.list_teams(organization))
    with _github_client(credentials_file) as client:
        return client.list_teams(organization)


def check_maintainer_handles(*, maintainers_file: Path) -> HandleReport:
    report = check_handles(load_maintainers(maintainers_file))
    log.info(
        "Checked handles: complete=%s, missing_id=%s, missing_name=%s, missing_both=%s",
        report.complete,
        report.missing_id,
        report.missing_name,
        report.missing_both,
    )
    return report


def backfill_ids(
    *,
    maintainers_file: Path,
    credentials_file: Path | None = None,
    directory: DirectoryClient | None = None,
) -> str:
    """Return the maintainer file with every resolvable missing id filled in."""

    maintainers = load_maintainers(maintainers_file)
    missing = sorted(
        {m.name for m in maintainers.values() if m.name is not None and m.id is None}
    )

    owned: GitHubClient | None = None
    if directory is None:
        directory = owned = _github_client(credentials_file)
    found: dict[str, RemoteID] = {}
    try:
        for name in missing:
            log.info("Getting id for %s", name)
            try:
                identity = directory.lookup_user(name)
            except DirectoryError as exc:
                log.warning("Error fetching id for %s: %s", name, exc)
                continue
            log.info("Found id %s for %s", identity.id, name)
            found[name] = identity.id
    finally:
        if owned is not None:
            owned.close()

    return backfill_file(found, maintainers_file.read_text(encoding="utf-8"))


def blame_authors(
    *,
    maintainers_file: Path,
    history_dir: Path | None = None,
    credentials_file: Path | None = None,
    commits: CommitAuthorLookup | None = None,
) -> ProvenanceReport:
    """Check every maintainer's recorded account against the author who added them."""

    log.info(
        "Verifying maintainer accounts match the author of the commit adding each entry"
    )
    maintainers = load_maintainers(maintainers_file)
    sources = load_history(maintainers_file, history_dir or bundled_history_dir())

    owned: GitHubClient | None = None
    if commits is None:
        commits = owned = _github_client(credentials_file)
    report = ProvenanceReport()
    try:
        scorer = ConfidenceScorer(resolver=ProvenanceResolver(sources), commits=commits)
        for handle, maintainer in sorted(maintainers.items()):
            identity = maintainer.identity
            if identity is None:
                continue
            result = scorer.confidence_for(handle, identity)
            if result is None:
                report.unresolved += 1
            else:
                report.confidence[result] += 1
    finally:
        if owned is not None:
            owned.close()

    return report
