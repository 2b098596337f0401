"""Persistent record of everyone this tool has invited to the team.

Users who were invited, never accepted and no longer have a pending invitation
are assumed to have rejected it; the ledger keeps them from being invited again.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from teamsync.domain.model import RemoteID

log = getLogger(__name__)


class LedgerError(RuntimeError):
    """Raised when the invitation ledger file cannot be read, parsed or written."""


class InvitationLedger:
    def __init__(self, invited: Iterable[RemoteID] = ()) -> None:
        self._invited: set[RemoteID] = set(invited)

    @classmethod
    def load(cls, path: Path) -> InvitationLedger:
        """Load the ledger, creating an empty file when ``path`` does not exist."""

        try:
            path.touch(exist_ok=True)
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            log.error("Failed to open invited list file %s: %s", path, exc)
            raise LedgerError(f"Cannot read invited list {path}: {exc}") from exc

        invited: set[RemoteID] = set()
        for lineno, line in enumerate(content.splitlines(), start=1):
            stripped = line.strip()
            if not stripped:
                continue
            try:
                value = int(stripped)
            except ValueError as exc:
                log.error("Failed to parse invited id on line %s of %s: %r", lineno, path, line)
                raise LedgerError(f"{path}:{lineno}: not a numeric id: {line!r}") from exc
            if value < 0:
                raise LedgerError(f"{path}:{lineno}: negative id: {line!r}")
            invited.add(value)

        log.debug("Loaded %s previously invited ids from %s", len(invited), path)
        return cls(invited)

    def save(self, path: Path) -> None:
        """Write the ledger sorted ascending, one id per line."""

        lines = "".join(f"{value}\n" for value in sorted(self._invited))
        try:
            path.write_text(lines, encoding="utf-8")
        except OSError as exc:
            log.error("Failed to write invited list file %s: %s", path, exc)
            raise LedgerError(f"Cannot write invited list {path}: {exc}") from exc

    def __contains__(self, value: object) -> bool:
        return value in self._invited

    def __len__(self) -> int:
        return len(self._invited)

    def __iter__(self) -> Iterator[RemoteID]:
        return iter(sorted(self._invited))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvitationLedger):
            return NotImplemented
        return self._invited == other._invited

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"InvitationLedger({sorted(self._invited)!r})"

    def add(self, value: RemoteID) -> None:
        self._invited.add(value)

    def remove(self, value: RemoteID) -> None:
        self._invited.discard(value)
