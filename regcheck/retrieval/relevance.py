"""
Relevance scoring of candidate legal provisions against a user query.

Ranks candidates with a pluggable base-score strategy:
- Keyword term counting (default)
- Embedding cosine similarity

then applies a categorical prior, a recency bonus and an optional
primary-jurisdiction boost.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

import numpy as np

from ..models import (
    Citation,
    DEFINITIONS,
    ELIGIBILITY,
    EXCEPTIONS,
    LegalProvision,
    RetrievalResult,
)
from .conflict import ConflictAnalyzer


logger = logging.getLogger(__name__)


def searchable_text(provision: LegalProvision) -> str:
    """Text a provision is matched against."""
    return f"{provision.title} {provision.citation_text} {provision.category}"


class ScoringStrategy(ABC):
    """Base-score contract: a non-negative relevance score before adjustments."""

    @abstractmethod
    def base_score(self, query: str, provision: LegalProvision) -> float:
        """
        Score one provision against a query.

        Args:
            query: Raw user query
            provision: Candidate provision

        Returns:
            Non-negative base score
        """
        pass


class KeywordScoring(ScoringStrategy):
    """
    Term-count scoring.

    Every query term longer than ``min_term_length`` characters earns
    ``term_weight`` per case-insensitive occurrence in the provision's
    title, citation text and category.
    """

    def __init__(self, min_term_length: int = 3, term_weight: float = 10):
        self.min_term_length = min_term_length
        self.term_weight = term_weight

    def terms(self, query: str) -> list[str]:
        return [t for t in query.lower().split() if len(t) > self.min_term_length]

    def base_score(self, query: str, provision: LegalProvision) -> float:
        text = searchable_text(provision).lower()
        return sum(text.count(term) * self.term_weight for term in self.terms(query))


class EmbeddingScoring(ScoringStrategy):
    """
    Similarity scoring with an embedding model.

    The cosine similarity between query and provision text is clipped to
    [0, 1] and scaled by ``scale`` so it lands in the same range as
    keyword scores.
    """

    def __init__(
        self,
        embedding_model: Callable[[str], np.ndarray],
        scale: float = 100
    ):
        """
        Initialize embedding scoring.

        Args:
            embedding_model: Function mapping text to a 1-D embedding vector
            scale: Multiplier applied to the clipped similarity
        """
        self.embedding_model = embedding_model
        self.scale = scale
        self._embeddings_cache: dict[str, np.ndarray] = {}

    def base_score(self, query: str, provision: LegalProvision) -> float:
        return self.similarity(query, searchable_text(provision)) * self.scale

    def similarity(self, text_a: str, text_b: str) -> float:
        """Cosine similarity clipped to [0, 1]."""
        emb_a = self._get_embedding(text_a)
        emb_b = self._get_embedding(text_b)

        norm_a = np.linalg.norm(emb_a)
        norm_b = np.linalg.norm(emb_b)

        if norm_a == 0 or norm_b == 0:
            return 0.0

        cosine = float(np.dot(emb_a, emb_b) / (norm_a * norm_b))
        return min(1.0, max(0.0, cosine))

    def _get_embedding(self, text: str) -> np.ndarray:
        """Get or compute embedding for text."""
        if text not in self._embeddings_cache:
            self._embeddings_cache[text] = np.asarray(self.embedding_model(text), dtype=float)
        return self._embeddings_cache[text]


@dataclass(frozen=True)
class ScoredProvision:
    """A candidate with its final relevance score."""

    provision: LegalProvision
    score: float
    boosted: bool = False


class RelevanceScorer:
    """
    Ranks candidate provisions and builds the retrieval result.

    Ranking is a stable descending sort, so equal scores keep the order
    the store returned the candidates in.
    """

    CATEGORY_PRIORS = {
        ELIGIBILITY: 20,
        EXCEPTIONS: 15,
        DEFINITIONS: 10,
    }

    def __init__(
        self,
        strategy: Optional[ScoringStrategy] = None,
        conflict_analyzer: Optional[ConflictAnalyzer] = None,
        top_k: int = 5,
        category_priors: Optional[dict[str, float]] = None,
        recency_days: int = 365,
        recency_bonus: float = 5,
        jurisdiction_boost: float = 1.5
    ):
        """
        Initialize scorer.

        Args:
            strategy: Base-score strategy; keyword counting if None
            conflict_analyzer: Analyzer for the top citations
            top_k: Number of citations to keep
            category_priors: Replacement for CATEGORY_PRIORS
            recency_days: Window for the recency bonus
            recency_bonus: Points for provisions effective within the window
            jurisdiction_boost: Multiplier for the primary jurisdiction
        """
        self.strategy = strategy or KeywordScoring()
        self.conflict_analyzer = conflict_analyzer or ConflictAnalyzer()
        self.top_k = top_k
        self.category_priors = dict(
            self.CATEGORY_PRIORS if category_priors is None else category_priors
        )
        self.recency_days = recency_days
        self.recency_bonus = recency_bonus
        self.jurisdiction_boost = jurisdiction_boost

    def score(
        self,
        query: str,
        provision: LegalProvision,
        primary_jurisdiction: Optional[str] = None,
        as_of: Optional[date] = None
    ) -> float:
        """
        Score one provision against the query.

        Args:
            query: User query
            provision: Candidate provision
            primary_jurisdiction: Optional jurisdiction to boost
            as_of: Evaluation date for the recency bonus (default today)

        Returns:
            Final relevance score
        """
        as_of = as_of or date.today()

        score = self.strategy.base_score(query, provision)
        score += self.category_priors.get(provision.category, 0)

        if provision.effective_date is not None:
            age_days = (as_of - provision.effective_date).days
            if age_days < self.recency_days:
                score += self.recency_bonus

        if self._matches_jurisdiction(provision, primary_jurisdiction):
            score *= self.jurisdiction_boost

        return score

    def rank(
        self,
        query: str,
        candidates: Sequence[LegalProvision],
        primary_jurisdiction: Optional[str] = None,
        as_of: Optional[date] = None
    ) -> list[ScoredProvision]:
        """
        Rank all candidates by descending score.

        Args:
            query: User query
            candidates: Candidate provisions in store order
            primary_jurisdiction: Optional jurisdiction to boost
            as_of: Evaluation date for the recency bonus

        Returns:
            Scored candidates, best first
        """
        as_of = as_of or date.today()
        scored = [
            ScoredProvision(
                provision=p,
                score=self.score(query, p, primary_jurisdiction, as_of),
                boosted=self._matches_jurisdiction(p, primary_jurisdiction),
            )
            for p in candidates
        ]
        # sorted() is stable, so ties keep candidate order
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def retrieve(
        self,
        query: str,
        candidates: Sequence[LegalProvision],
        primary_jurisdiction: Optional[str] = None,
        as_of: Optional[date] = None
    ) -> RetrievalResult:
        """
        Select the top citations and compute their conflict score.

        Args:
            query: User query
            candidates: Candidate provisions returned by the store
            primary_jurisdiction: Optional jurisdiction to boost
            as_of: Evaluation date for the recency bonus

        Returns:
            RetrievalResult; empty with a conflict score of 0 when there
            are no candidates
        """
        if not candidates:
            logger.info("No candidate provisions returned; skipping scoring")
            return RetrievalResult(top_citations=(), conflict_score=0)

        ranked = self.rank(query, candidates, primary_jurisdiction, as_of)
        top = tuple(Citation.from_provision(s.provision) for s in ranked[:self.top_k])

        conflict_score = self.conflict_analyzer.score(top, candidates)

        logger.debug(
            "Top citations: "
            + ", ".join(f"{s.provision.section_id}={s.score:g}" for s in ranked[:self.top_k])
        )

        return RetrievalResult(top_citations=top, conflict_score=conflict_score)

    @staticmethod
    def _matches_jurisdiction(
        provision: LegalProvision,
        primary_jurisdiction: Optional[str]
    ) -> bool:
        if not primary_jurisdiction:
            return False
        return provision.jurisdiction.strip().lower() == primary_jurisdiction.strip().lower()
