"""Maintainer list and history adapters backed by Nix and git."""

from __future__ import annotations

from .evaluate import NixEvaluationError
from .history import HistoryError, current_snapshot, load_history, parse_blame
from .maintainers import MaintainerSourceError, load_maintainers, maintainer_positions

__all__ = [
    "HistoryError",
    "MaintainerSourceError",
    "NixEvaluationError",
    "current_snapshot",
    "load_history",
    "load_maintainers",
    "maintainer_positions",
    "parse_blame",
]
