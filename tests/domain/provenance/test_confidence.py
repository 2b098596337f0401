from __future__ import annotations

import pytest

from teamsync.domain.model import Confidence, RemoteIdentity
from teamsync.domain.provenance import (
    CONFIDENCE_OVERRIDES,
    ConfidenceScorer,
    HistorySource,
    ProvenanceResolver,
    score,
)
from tests.helpers.directory import FakeCommitLookup


@pytest.mark.parametrize(
    ("claimed", "author", "expected"),
    [
        (("alice", 1), ("alice", 1), Confidence.TOTAL),
        (("Alice", 1), ("aLICE", 1), Confidence.TOTAL),
        (("alice", 1), ("alice", 2), Confidence.BAD_ATTRIBUTION),
        (("alice", 1), ("alice2", 1), Confidence.CHANGED_HANDLE),
        (("alice", 1), ("bob", 2), Confidence.MISMATCHED_NAME_AND_ID),
    ],
)
def test_score_table(
    claimed: tuple[str, int],
    author: tuple[str, int],
    expected: Confidence,
) -> None:
    result = score(RemoteIdentity(*claimed), RemoteIdentity(*author))

    assert result is expected


@pytest.mark.parametrize(("claimed_name", "author_name", "revision"), sorted(CONFIDENCE_OVERRIDES))
def test_overrides_turn_known_mismatches_into_total(
    claimed_name: str,
    author_name: str,
    revision: str,
) -> None:
    claimed = RemoteIdentity(name=claimed_name, id=100)
    author = RemoteIdentity(name=author_name, id=200)

    assert score(claimed, author, revision) is Confidence.TOTAL
    assert score(claimed, author, "0" * 40) is Confidence.MISMATCHED_NAME_AND_ID


def test_overrides_match_names_exactly() -> None:
    claimed = RemoteIdentity(name="ZX2C4", id=100)
    author = RemoteIdentity(name="mic92", id=200)

    result = score(claimed, author, "6b1087d9b135c94b929fec3d4cf3724b9539c6b5")

    assert result is Confidence.MISMATCHED_NAME_AND_ID


def test_override_table_contents() -> None:
    assert {(claimed, author) for claimed, author, _ in CONFIDENCE_OVERRIDES} == {
        ("rlupton20", "offlinehacker"),
        ("zx2c4", "Mic92"),
        ("the-kenny", "bjornfor"),
    }


def _scorer(authors: dict[str, RemoteIdentity | None]) -> ConfidenceScorer:
    source = HistorySource(
        revisions=("r-alice", "r-bob", "r-carol"),
        line_of_handle={"alice": 0, "bob": 1, "carol": 2},
    )
    return ConfidenceScorer(
        resolver=ProvenanceResolver([source]),
        commits=FakeCommitLookup(authors),
    )


def test_scorer_uses_resolved_commit_author() -> None:
    scorer = _scorer({"r-alice": RemoteIdentity(name="alice", id=1)})

    assert scorer.confidence_for("alice", RemoteIdentity(name="alice", id=1)) is Confidence.TOTAL
    assert (
        scorer.confidence_for("alice", RemoteIdentity(name="alice", id=9))
        is Confidence.BAD_ATTRIBUTION
    )


def test_scorer_reports_missing_commits() -> None:
    scorer = _scorer({"r-bob": None})

    bob = RemoteIdentity(name="bob", id=2)
    assert scorer.confidence_for("bob", bob) is Confidence.COMMIT_MISSING
    assert (
        scorer.confidence_for("carol", RemoteIdentity(name="carol", id=3))
        is Confidence.COMMIT_MISSING
    )


def test_scorer_returns_none_when_unresolved() -> None:
    scorer = _scorer({})

    assert scorer.confidence_for("zed", RemoteIdentity(name="zed", id=26)) is None
