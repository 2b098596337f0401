"""Team synchronisation defaults."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path

HISTORY_MANIFEST_FILENAME = "manifest.json"


def bundled_history_dir() -> Path:
    """Directory of archived maintainer-list snapshots shipped with the package."""

    return Path(str(resources.files("teamsync") / "data" / "history"))


@dataclass(frozen=True, slots=True)
class SyncConfig:
    dry_run: bool = False
    limit: int | None = None
    invited_list: Path | None = None
    verify_provenance: bool = False
    history_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            raise ValueError("Change limit must be non-negative")

    def resolve_history_dir(self) -> Path:
        return self.history_dir if self.history_dir is not None else bundled_history_dir()
