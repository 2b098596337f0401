"""Report on the completeness of maintainer identity claims."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from teamsync.domain.model import Handle, MaintainerRecord

log = getLogger(__name__)


@dataclass(slots=True)
class HandleReport:
    complete: int = 0
    missing_id: int = 0
    missing_name: int = 0
    missing_both: int = 0


def check_handles(maintainers: Mapping[Handle, MaintainerRecord]) -> HandleReport:
    report = HandleReport()
    for handle, maintainer in sorted(maintainers.items()):
        match (maintainer.name, maintainer.id):
            case (str() as name, int() as remote_id):
                report.complete += 1
                log.info("%s: account %s with id %s", handle, name, remote_id)
            case (str() as name, None):
                report.missing_id += 1
                log.warning("%s: missing account id for %s", handle, name)
            case (None, int() as remote_id):
                report.missing_name += 1
                log.error("%s: account id %s recorded without an account name", handle, remote_id)
            case _:
                report.missing_both += 1
                log.debug("%s: no account name or id", handle)
    return report
