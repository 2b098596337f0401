from __future__ import annotations

from teamsync.domain.model import ActualMember, RemoteIdentity
from teamsync.domain.reconciliation import (
    AddMember,
    KeepMember,
    RemoveMember,
    SyncMetrics,
    maintainer_team_diff,
)
from tests.helpers.directory import make_maintainer, maintainers


def test_diff_produces_remove_keep_and_add() -> None:
    desired = maintainers(
        make_maintainer("bob", "bob", 2),
        make_maintainer("charlie", "charlie", 3),
    )
    members = [ActualMember(id=1, name="alice"), ActualMember(id=2, name="bob")]

    diff = maintainer_team_diff(desired, members)

    assert diff == {
        1: RemoveMember(identity=RemoteIdentity(name="alice", id=1)),
        2: KeepMember(handle="bob"),
        3: AddMember(identity=RemoteIdentity(name="charlie", id=3), handle="charlie"),
    }


def test_keep_wins_over_renamed_account() -> None:
    desired = maintainers(make_maintainer("bob", "bobby", 2))
    members = [ActualMember(id=2, name="bob")]

    assert maintainer_team_diff(desired, members) == {2: KeepMember(handle="bob")}


def test_every_id_on_either_side_gets_one_action() -> None:
    desired = maintainers(
        make_maintainer("a", "a", 10),
        make_maintainer("b", "b", 11),
        make_maintainer("c", "c", 12),
    )
    members = [ActualMember(id=11, name="b"), ActualMember(id=13, name="d")]

    diff = maintainer_team_diff(desired, members)

    assert set(diff) == {10, 11, 12, 13}


def test_records_without_id_are_left_out() -> None:
    metrics = SyncMetrics()
    desired = maintainers(
        make_maintainer("nameless", remote_id=5),
        make_maintainer("idless", "idless"),
        make_maintainer("empty"),
        make_maintainer("member", remote_id=6),
    )
    members = [ActualMember(id=6, name="member")]

    diff = maintainer_team_diff(desired, members, metrics=metrics)

    assert diff == {6: KeepMember(handle="member")}
    assert metrics.maintainers_missing_id == 2
    assert metrics.maintainers_missing_name == 3


def test_empty_desired_removes_everyone() -> None:
    members = [ActualMember(id=1, name="alice")]

    diff = maintainer_team_diff({}, members)

    assert diff == {1: RemoveMember(identity=RemoteIdentity(name="alice", id=1))}
