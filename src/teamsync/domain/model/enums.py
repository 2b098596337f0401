"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Confidence(StrEnum):
    """How well a claimed identity matches the author of its provenance revision."""

    TOTAL = "total"
    BAD_ATTRIBUTION = "bad_attribution"
    CHANGED_HANDLE = "changed_handle"
    MISMATCHED_NAME_AND_ID = "mismatched_name_and_id"
    COMMIT_MISSING = "commit_missing"

    @property
    def trusted(self) -> bool:
        return self not in {Confidence.BAD_ATTRIBUTION, Confidence.MISMATCHED_NAME_AND_ID}


class DirectoryErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    PERMISSION = "permission"
