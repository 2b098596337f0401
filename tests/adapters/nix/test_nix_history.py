from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest

from teamsync.adapters.nix import HistoryError, history, load_history, parse_blame
from teamsync.config import HISTORY_MANIFEST_FILENAME, bundled_history_dir
from teamsync.domain.provenance import HistorySource

OLD = "05d273a45ed741d61ac6918361658c0c57b0ba41"
SORT = "220459858b342ec880d484160eb63319b7b83af8"

BLAME = f"""\
{SORT} (Someone 2019-01-01 00:00:00 +0000 1) {{
{"a" * 40} (Alice   2018-03-04 10:00:00 +0000 2)   alice = {{
                                         (Boundary 2009-01-01 00:00:00 +0000 3)   bob = {{
"""


def test_parse_blame_takes_revision_column() -> None:
    assert parse_blame(BLAME.splitlines()) == (SORT, "a" * 40, "")


def _write_snapshot(history_dir: Path, **entry: str) -> None:
    (history_dir / HISTORY_MANIFEST_FILENAME).write_text(
        json.dumps({"snapshots": [{"revision": OLD, **entry}]})
    )


def test_load_history_puts_current_snapshot_first(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    current = HistorySource(revisions=(SORT,), line_of_handle={"alice": 0}, label="current")
    monkeypatch.setattr(history, "current_snapshot", lambda _: current)
    (tmp_path / "old.blame").write_text(BLAME)
    (tmp_path / "old.json").write_text(json.dumps({"alice": 1, "bob": 2}))
    _write_snapshot(tmp_path, blame="old.blame", positions="old.json")

    sources = load_history(tmp_path / "maintainer-list.nix", tmp_path)

    assert sources[0] is current
    archived = sources[1]
    assert archived.label == OLD
    assert archived.revision_for("alice") == "a" * 40
    assert archived.revision_for("bob") is None


def test_archived_snapshot_can_evaluate_maintainer_copy(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    evaluated: list[Path] = []

    def fake_positions(path: Path) -> dict[str, int]:
        evaluated.append(path)
        return {"alice": 1}

    monkeypatch.setattr(history, "maintainer_positions", fake_positions)
    (tmp_path / "old.blame").write_text(BLAME)
    snapshot = history.ArchivedSnapshot(revision=OLD, blame="old.blame", maintainers="old.nix")

    source = history.load_archived_snapshot(tmp_path, snapshot)

    assert evaluated == [tmp_path / "old.nix"]
    assert source.revision_for("alice") == "a" * 40


@pytest.mark.parametrize(
    "entry",
    [
        {"blame": "old.blame"},
        {"blame": "old.blame", "positions": "a.json", "maintainers": "a.nix"},
    ],
)
def test_manifest_needs_exactly_one_position_source(
    tmp_path: Path,
    entry: dict[str, str],
) -> None:
    _write_snapshot(tmp_path, **entry)

    with pytest.raises(HistoryError):
        history.load_manifest(tmp_path)


def test_missing_manifest_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(HistoryError):
        history.load_manifest(tmp_path)


def test_missing_snapshot_files_are_an_error(tmp_path: Path) -> None:
    snapshot = history.ArchivedSnapshot(revision=OLD, blame="gone.blame", positions="gone.json")

    with pytest.raises(HistoryError):
        history.load_archived_snapshot(tmp_path, snapshot)


def test_bundled_manifest_loads() -> None:
    manifest = history.load_manifest(bundled_history_dir())

    assert isinstance(manifest.snapshots, tuple)
