"""Counters collected over one synchronisation run."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(slots=True)
class SyncMetrics:
    """Explicit metrics sink passed through the diff and the applier."""

    directory_calls: int = 0
    team_members: int = 0
    pending_invitations: int = 0
    maintainers_missing_name: int = 0
    maintainers_missing_id: int = 0
    change_limit: int | None = None
    noops: int = 0
    additions: int = 0
    removals: int = 0
    errors: int = 0
    lookup_failures: int = 0
    add_failures: int = 0
    remove_failures: int = 0
    username_id_mismatches: int = 0
    untrusted: int = 0
    limit_reached: bool = False

    @property
    def changes(self) -> int:
        return self.additions + self.removals

    def as_dict(self) -> dict[str, int | bool | None]:
        return asdict(self)
