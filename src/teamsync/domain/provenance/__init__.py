"""Provenance of maintainer identity claims."""

from __future__ import annotations

from .confidence import CONFIDENCE_OVERRIDES, ConfidenceScorer, score
from .resolver import BARRIER_REVISIONS, HistorySource, ProvenanceResolver

__all__ = [
    "BARRIER_REVISIONS",
    "CONFIDENCE_OVERRIDES",
    "ConfidenceScorer",
    "HistorySource",
    "ProvenanceResolver",
    "score",
]
