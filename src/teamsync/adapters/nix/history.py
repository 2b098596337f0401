"""Build provenance history sources from git blame output.

The current snapshot is blamed live. Archived snapshots live in a history
directory described by ``manifest.json``::

    {
      "snapshots": [
        {
          "revision": "05d273a45ed741d61ac6918361658c0c57b0ba41",
          "blame": "maintainer-list-05d273a.blame",
          "positions": "maintainer-list-05d273a.json"
        }
      ]
    }

listed from most recent to oldest. ``blame`` is the output of ``git blame -l -b``
at that revision. ``positions`` is a JSON object of handle to zero-based line;
alternatively ``maintainers`` names a copy of the maintainer list at that
revision, and the positions are computed with Nix.
"""

from __future__ import annotations

import subprocess
from logging import getLogger
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, model_validator

from teamsync.config import HISTORY_MANIFEST_FILENAME
from teamsync.domain.provenance import HistorySource

from .maintainers import MaintainerSourceError, maintainer_positions

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

log = getLogger(__name__)


class HistoryError(RuntimeError):
    """Raised when a history source cannot be produced."""


class ArchivedSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    revision: str
    blame: str
    positions: str | None = None
    maintainers: str | None = None

    @model_validator(mode="after")
    def _exactly_one_position_source(self) -> Self:
        if (self.positions is None) == (self.maintainers is None):
            raise ValueError("Snapshot needs exactly one of 'positions' or 'maintainers'")
        return self


class HistoryManifest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    snapshots: tuple[ArchivedSnapshot, ...] = ()


_POSITIONS = TypeAdapter(dict[str, int])


def parse_blame(lines: Iterable[str]) -> tuple[str, ...]:
    """Return the revision column of ``git blame -l -b`` output, one per line."""

    return tuple(line.split(" ", 1)[0] for line in lines)


def git_blame_revisions(path: Path) -> tuple[str, ...]:
    resolved = path.resolve()
    command = ["git", "blame", "-l", "-b", str(resolved)]
    try:
        completed = subprocess.run(  # noqa: S603
            command,
            capture_output=True,
            check=False,
            cwd=resolved.parent,
        )
    except OSError as exc:
        raise HistoryError(f"Failed to start git blame: {exc}") from exc

    stderr = completed.stderr.decode("utf-8", errors="replace").strip()
    if stderr:
        log.warning("Stderr from git blame: %s", stderr)
    if completed.returncode != 0:
        raise HistoryError(f"git blame of {resolved} exited with {completed.returncode}")
    return parse_blame(completed.stdout.decode("utf-8", errors="replace").splitlines())


def current_snapshot(maintainer_file: Path) -> HistorySource:
    try:
        positions = maintainer_positions(maintainer_file)
    except MaintainerSourceError as exc:
        raise HistoryError(str(exc)) from exc
    return HistorySource(
        revisions=git_blame_revisions(maintainer_file),
        line_of_handle=positions,
        label="current",
    )


def load_manifest(history_dir: Path) -> HistoryManifest:
    path = history_dir / HISTORY_MANIFEST_FILENAME
    try:
        return HistoryManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise HistoryError(f"Cannot read history manifest {path}: {exc}") from exc
    except ValidationError as exc:
        raise HistoryError(f"Malformed history manifest {path}: {exc}") from exc


def load_archived_snapshot(history_dir: Path, snapshot: ArchivedSnapshot) -> HistorySource:
    try:
        blame = (history_dir / snapshot.blame).read_text(encoding="utf-8")
        if snapshot.positions is not None:
            raw = (history_dir / snapshot.positions).read_text(encoding="utf-8")
            positions = _POSITIONS.validate_json(raw)
        else:
            positions = maintainer_positions(history_dir / str(snapshot.maintainers))
    except OSError as exc:
        raise HistoryError(f"Cannot read snapshot {snapshot.revision}: {exc}") from exc
    except (ValidationError, MaintainerSourceError) as exc:
        raise HistoryError(f"Malformed snapshot {snapshot.revision}: {exc}") from exc

    return HistorySource(
        revisions=parse_blame(blame.splitlines()),
        line_of_handle=positions,
        label=snapshot.revision,
    )


def load_history(maintainer_file: Path, history_dir: Path) -> list[HistorySource]:
    """Return the live snapshot followed by every archived one, newest first."""

    manifest = load_manifest(history_dir)
    sources = [current_snapshot(maintainer_file)]
    sources.extend(load_archived_snapshot(history_dir, entry) for entry in manifest.snapshots)
    log.info("Loaded %s history sources (%s archived)", len(sources), len(manifest.snapshots))
    return sources

