"""Score an identity claim against the author of the revision that made it."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from teamsync.domain.model import Confidence, names_match
from teamsync.domain.ports import DirectoryError

if TYPE_CHECKING:
    from teamsync.domain.model import Handle, RemoteIdentity
    from teamsync.domain.ports import CommitAuthorLookup

    from .resolver import ProvenanceResolver

log = getLogger(__name__)

# (claimed name, commit author name, revision): entries added by someone else on
# the maintainer's behalf. Drop an entry once the history it covers is corrected.
CONFIDENCE_OVERRIDES: Final[frozenset[tuple[str, str, str]]] = frozenset(
    {
        ("rlupton20", "offlinehacker", "5bd136acd4c683b30470b5dfbb6f0b15dcea42a5"),
        ("zx2c4", "Mic92", "6b1087d9b135c94b929fec3d4cf3724b9539c6b5"),
        ("the-kenny", "bjornfor", "6b1087d9b135c94b929fec3d4cf3724b9539c6b5"),
    }
)


def _is_override(claimed: RemoteIdentity, author: RemoteIdentity, revision: str) -> bool:
    return (claimed.name, author.name, revision) in CONFIDENCE_OVERRIDES


def score(claimed: RemoteIdentity, author: RemoteIdentity, revision: str = "") -> Confidence:
    """Classify ``claimed`` against the ``author`` of ``revision``."""

    name_match = names_match(claimed.name, author.name)
    id_match = claimed.id == author.id

    if name_match and id_match:
        return Confidence.TOTAL
    if not name_match and not id_match and _is_override(claimed, author, revision):
        return Confidence.TOTAL
    if name_match:
        return Confidence.BAD_ATTRIBUTION
    if id_match:
        return Confidence.CHANGED_HANDLE
    return Confidence.MISMATCHED_NAME_AND_ID


@dataclass(slots=True)
class ConfidenceScorer:
    resolver: ProvenanceResolver
    commits: CommitAuthorLookup

    def confidence_for(self, handle: Handle, claimed: RemoteIdentity) -> Confidence | None:
        """Score ``claimed`` for ``handle``; ``None`` when no revision can be found."""

        revision = self.resolver.commit_for(handle)
        if revision is None:
            log.warning("Did not find a suitable commit hash for %s", handle)
            return None
        return self.check_revision(handle, claimed, revision)

    def check_revision(self, handle: Handle, claimed: RemoteIdentity, revision: str) -> Confidence:
        log.debug("Looking up commit %s for %s", revision, handle)
        try:
            author = self.commits.get_commit_author(revision)
        except DirectoryError as exc:
            log.warning("Failed to fetch commit %s for %s: %s", revision, handle, exc)
            return Confidence.COMMIT_MISSING
        if author is None:
            log.warning("Commit %s for %s has no linked author account", revision, handle)
            return Confidence.COMMIT_MISSING

        result = score(claimed, author, revision)
        match result:
            case Confidence.TOTAL:
                log.debug("Commit %s matches %s completely", revision, author)
            case Confidence.BAD_ATTRIBUTION:
                log.error(
                    "Recorded id for %s looks wrong: claimed %s but %s was authored by %s",
                    handle,
                    claimed,
                    revision,
                    author,
                )
            case Confidence.CHANGED_HANDLE:
                log.warning(
                    "%s changed their account name: recorded %s, %s authored as %s",
                    handle,
                    claimed.name,
                    revision,
                    author.name,
                )
            case _:
                log.warning(
                    "Neither name nor id of %s match the author of %s: claimed %s, author %s",
                    handle,
                    revision,
                    claimed,
                    author,
                )
        return result
