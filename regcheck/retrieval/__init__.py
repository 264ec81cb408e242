"""Retrieval module for relevance scoring and conflict analysis."""

from .relevance import (
    RelevanceScorer,
    ScoringStrategy,
    KeywordScoring,
    EmbeddingScoring,
    ScoredProvision,
)
from .conflict import ConflictAnalyzer, ConflictBreakdown

__all__ = [
    "RelevanceScorer",
    "ScoringStrategy",
    "KeywordScoring",
    "EmbeddingScoring",
    "ScoredProvision",
    "ConflictAnalyzer",
    "ConflictBreakdown",
]
