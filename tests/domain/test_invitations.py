from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from teamsync.domain.invitations import InvitationLedger, LedgerError


def test_load_creates_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "invited.txt"

    ledger = InvitationLedger.load(path)

    assert len(ledger) == 0
    assert path.exists()


def test_empty_ledger_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "invited.txt"

    InvitationLedger().save(path)

    assert path.read_text() == ""
    assert InvitationLedger.load(path) == InvitationLedger()


def test_ledger_round_trips_sorted(tmp_path: Path) -> None:
    path = tmp_path / "invited.txt"
    ids = [18, 0, 9, 3, 15, 6, 12]

    InvitationLedger(ids).save(path)

    assert path.read_text() == "0\n3\n6\n9\n12\n15\n18\n"
    assert InvitationLedger.load(path) == InvitationLedger(range(0, 19, 3))


def test_load_ignores_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "invited.txt"
    path.write_text("5\n\n  \n7\n")

    ledger = InvitationLedger.load(path)

    assert list(ledger) == [5, 7]


@pytest.mark.parametrize("content", ["12\nabc\n", "1.5\n", "-4\n"])
def test_load_rejects_malformed_lines(tmp_path: Path, content: str) -> None:
    path = tmp_path / "invited.txt"
    path.write_text(content)

    with pytest.raises(LedgerError):
        InvitationLedger.load(path)


def test_load_reports_unreadable_path(tmp_path: Path) -> None:
    with pytest.raises(LedgerError):
        InvitationLedger.load(tmp_path / "missing-dir" / "invited.txt")


def test_add_and_remove() -> None:
    ledger = InvitationLedger([1])

    ledger.add(2)
    ledger.remove(1)
    ledger.remove(99)

    assert 2 in ledger
    assert 1 not in ledger
    assert list(ledger) == [2]
