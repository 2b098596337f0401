"""Domain port definitions for adapters."""

from __future__ import annotations

from .directory import DirectoryClient, DirectoryError
from .history import CommitAuthorLookup

__all__ = [
    "CommitAuthorLookup",
    "DirectoryClient",
    "DirectoryError",
]
