from __future__ import annotations

import logging

import pytest

from teamsync.domain.handles import HandleReport, check_handles
from tests.helpers.directory import make_maintainer, maintainers


def test_check_handles_counts_each_category(caplog: pytest.LogCaptureFixture) -> None:
    records = maintainers(
        make_maintainer("alice", "alice", 1),
        make_maintainer("bob", "bob"),
        make_maintainer("carol", remote_id=3),
        make_maintainer("dave"),
        make_maintainer("erin", "erin", 5),
    )

    with caplog.at_level(logging.DEBUG, logger="teamsync.domain.handles"):
        report = check_handles(records)

    assert report == HandleReport(complete=2, missing_id=1, missing_name=1, missing_both=1)
    levels = {record.getMessage().split(":")[0]: record.levelno for record in caplog.records}
    assert levels["bob"] == logging.WARNING
    assert levels["carol"] == logging.ERROR
    assert levels["dave"] == logging.DEBUG
