from __future__ import annotations

from pathlib import Path

import pytest

from teamsync.config import HISTORY_MANIFEST_FILENAME, SyncConfig, bundled_history_dir


def test_negative_limit_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        SyncConfig(limit=-1)


def test_history_dir_defaults_to_bundled_snapshots() -> None:
    resolved = SyncConfig().resolve_history_dir()

    assert resolved == bundled_history_dir()
    assert (resolved / HISTORY_MANIFEST_FILENAME).is_file()


def test_explicit_history_dir() -> None:
    assert SyncConfig(history_dir=Path("/tmp/history")).resolve_history_dir() == Path(
        "/tmp/history"
    )
