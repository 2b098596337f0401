"""Find the revision that introduced a maintainer entry.

The maintainer list has been sorted and reformatted many times, so a plain
``git blame`` of today's file credits whoever last reshuffled it. Each
:class:`HistorySource` is a blame captured just after one of those bulk
edits; walking them from newest to oldest and skipping any line still blamed
on a bulk edit recovers the commit that actually added the entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

    from teamsync.domain.model import Handle

log = getLogger(__name__)

BARRIER_REVISIONS: Final[frozenset[str]] = frozenset(
    {
        # sort and format
        "220459858b342ec880d484160eb63319b7b83af8",
        # convert maintainer file entries to attributes
        "f7da7fa0c3ab40b79a2358861831b925d2cb5a6b",
        # alphabetize
        "dea3279593753f0dee2966cd3f0f1f84be5bfbe2",
        # sort
        "a3a40b70892774792924824a9b8858a2ffd3489d",
        # alphabetize
        "b4f60add6a227bfeb106497c270b8126dad8f8d3",
        # insert-sort
        "a58a44e0c2106a87d258706f13cacc320adc8d32",
        # alphabetize
        "ac1c3c95e18f6e9839f2ca151c761d1b283831f1",
    }
)


@dataclass(frozen=True, slots=True)
class HistorySource:
    """Blame of one snapshot of the maintainer list.

    ``revisions[n]`` is the revision blamed for zero-based line ``n``;
    ``line_of_handle`` maps each handle to the line its entry starts on.
    """

    revisions: tuple[str, ...]
    line_of_handle: Mapping[Handle, int]
    label: str = "snapshot"

    def revision_for(self, handle: Handle) -> str | None:
        line = self.line_of_handle.get(handle)
        if line is None or not 0 <= line < len(self.revisions):
            return None
        # git blame -b leaves boundary commits blank
        return self.revisions[line] or None


@dataclass(slots=True)
class ProvenanceResolver:
    sources: Sequence[HistorySource]
    barriers: frozenset[str] = field(default=BARRIER_REVISIONS)

    def commit_for(self, handle: Handle) -> str | None:
        """Return the revision that introduced ``handle``, or ``None`` if unresolved."""

        for source in self.sources:
            log.debug("Examining %s for %s", source.label, handle)
            revision = source.revision_for(handle)
            if revision is None:
                continue
            if revision in self.barriers:
                log.debug(
                    "%s: %s is blamed on barrier %s, looking further back",
                    source.label,
                    handle,
                    revision,
                )
                continue
            log.debug("Identified %s as the source of %s in %s", revision, handle, source.label)
            return revision

        log.error("Did not find a suitable commit for %s", handle)
        return None
