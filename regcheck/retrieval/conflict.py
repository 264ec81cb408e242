"""
Conflict scoring across retrieved legal provisions.

Estimates how strongly the top citations disagree with or qualify one
another. Baseline signals (categories and qualifying language) are always
computed; jurisdiction-aware signals are layered on top whenever the
citations carry jurisdiction metadata.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..models import Citation, DEFINITIONS, ELIGIBILITY, EXCEPTIONS, LegalProvision


logger = logging.getLogger(__name__)


MIN_SCORE = 1
MAX_SCORE = 10


@dataclass(frozen=True)
class ConflictBreakdown:
    """Indicator contributions behind a conflict score."""

    citation_count: int
    category_overlap: int = 0
    definitional_divergence: int = 0
    qualifying_terms: int = 0
    cross_jurisdiction_categories: int = 0
    multi_jurisdiction: int = 0
    g7_cross_border: int = 0
    stringency_divergence: int = 0
    eu_non_eu: int = 0
    jurisdictions: tuple[str, ...] = ()

    @property
    def indicator_sum(self) -> int:
        return (
            self.category_overlap
            + self.definitional_divergence
            + self.qualifying_terms
            + self.cross_jurisdiction_categories
            + self.multi_jurisdiction
            + self.g7_cross_border
            + self.stringency_divergence
            + self.eu_non_eu
        )

    @property
    def score(self) -> int:
        """Normalized score: 0 without citations, 1 for a single citation."""
        if self.citation_count == 0:
            return 0
        if self.citation_count < 2:
            return MIN_SCORE
        return min(MAX_SCORE, max(MIN_SCORE, self.indicator_sum // 2 + 1))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'citation_count': self.citation_count,
            'category_overlap': self.category_overlap,
            'definitional_divergence': self.definitional_divergence,
            'qualifying_terms': self.qualifying_terms,
            'cross_jurisdiction_categories': self.cross_jurisdiction_categories,
            'multi_jurisdiction': self.multi_jurisdiction,
            'g7_cross_border': self.g7_cross_border,
            'stringency_divergence': self.stringency_divergence,
            'eu_non_eu': self.eu_non_eu,
            'jurisdictions': list(self.jurisdictions),
            'indicator_sum': self.indicator_sum,
            'score': self.score
        }


class ConflictAnalyzer:
    """
    Computes a bounded conflict score for a set of citations.

    All lexicons and jurisdiction tables are class-level defaults that can be
    replaced per instance.
    """

    # Language that qualifies or overrides another provision
    QUALIFYING_TERMS = (
        'except',
        'unless',
        'however',
        'notwithstanding',
        'provided that',
        'subject to',
    )

    G7_JURISDICTIONS = frozenset({
        'Canada',
        'France',
        'Germany',
        'Italy',
        'Japan',
        'United Kingdom',
        'United States',
        'European Union',
    })

    # Data protection stringency (higher = stricter)
    DATA_PROTECTION_STRINGENCY = {
        'European Union': 10,
        'Germany': 10,
        'France': 9,
        'Italy': 9,
        'Japan': 7,
        'United Kingdom': 8,
        'Canada': 7,
        'United States': 5,  # State-level varies
    }
    DEFAULT_STRINGENCY = 5

    EU_ALIGNED = frozenset({'European Union', 'Germany', 'France', 'Italy'})
    NON_EU = frozenset({'United States', 'Japan', 'United Kingdom', 'Canada'})

    # Indicator weights
    CATEGORY_OVERLAP_WEIGHT = 3
    DEFINITIONAL_DIVERGENCE_WEIGHT = 2
    QUALIFYING_TERM_WEIGHT = 1
    CROSS_JURISDICTION_CATEGORY_WEIGHT = 5
    MULTI_JURISDICTION_WEIGHT = 2
    G7_CROSS_BORDER_WEIGHT = 2
    STRINGENCY_DIVERGENCE_WEIGHT = 2
    EU_NON_EU_WEIGHT = 1
    STRINGENCY_SPREAD_THRESHOLD = 3

    def __init__(
        self,
        qualifying_terms: Optional[Iterable[str]] = None,
        g7_jurisdictions: Optional[Iterable[str]] = None,
        stringency: Optional[dict[str, int]] = None,
        eu_aligned: Optional[Iterable[str]] = None,
        non_eu: Optional[Iterable[str]] = None
    ):
        """
        Initialize analyzer.

        Args:
            qualifying_terms: Replacement for QUALIFYING_TERMS
            g7_jurisdictions: Replacement for G7_JURISDICTIONS
            stringency: Replacement for DATA_PROTECTION_STRINGENCY
            eu_aligned: Replacement for EU_ALIGNED
            non_eu: Replacement for NON_EU
        """
        self.qualifying_terms = tuple(
            self.QUALIFYING_TERMS if qualifying_terms is None else qualifying_terms
        )
        self.g7_jurisdictions = frozenset(
            self.G7_JURISDICTIONS if g7_jurisdictions is None else g7_jurisdictions
        )
        self.stringency = dict(
            self.DATA_PROTECTION_STRINGENCY if stringency is None else stringency
        )
        self.eu_aligned = frozenset(self.EU_ALIGNED if eu_aligned is None else eu_aligned)
        self.non_eu = frozenset(self.NON_EU if non_eu is None else non_eu)

    def score(
        self,
        citations: Sequence[Citation],
        candidates: Sequence[LegalProvision] = ()
    ) -> int:
        """
        Compute the conflict score for the citations.

        Args:
            citations: Top-ranked citations
            candidates: Full candidate set the citations were drawn from

        Returns:
            0 for no citations, otherwise an integer in [1, 10]
        """
        return self.analyze(citations, candidates).score

    def analyze(
        self,
        citations: Sequence[Citation],
        candidates: Sequence[LegalProvision] = ()
    ) -> ConflictBreakdown:
        """
        Compute every conflict indicator for the citations.

        Args:
            citations: Top-ranked citations
            candidates: Full candidate set, used to resolve category and
                jurisdiction for citations that do not carry them

        Returns:
            ConflictBreakdown with per-signal contributions
        """
        if len(citations) < 2:
            return ConflictBreakdown(citation_count=len(citations))

        by_id = {c.id: c for c in candidates}
        categories = [self._category_of(c, by_id) for c in citations]
        jurisdictions = [self._jurisdiction_of(c, by_id) for c in citations]

        # Baseline signals
        category_overlap = 0
        if ELIGIBILITY in categories and EXCEPTIONS in categories:
            category_overlap = self.CATEGORY_OVERLAP_WEIGHT

        definitional_divergence = 0
        if categories.count(DEFINITIONS) > 1:
            definitional_divergence = self.DEFINITIONAL_DIVERGENCE_WEIGHT

        qualifying_terms = 0
        for citation in citations:
            text = citation.citation_text.lower()
            for term in self.qualifying_terms:
                if term in text:
                    qualifying_terms += self.QUALIFYING_TERM_WEIGHT

        breakdown = ConflictBreakdown(
            citation_count=len(citations),
            category_overlap=category_overlap,
            definitional_divergence=definitional_divergence,
            qualifying_terms=qualifying_terms,
        )

        # Jurisdiction-aware layer, only when metadata is available
        known = [(cat, jur) for cat, jur in zip(categories, jurisdictions) if jur]
        if known:
            breakdown = self._layer_jurisdiction_signals(breakdown, known)

        logger.debug(
            f"Conflict indicators for {len(citations)} citations: "
            f"sum={breakdown.indicator_sum} score={breakdown.score}"
        )
        return breakdown

    def _layer_jurisdiction_signals(
        self,
        breakdown: ConflictBreakdown,
        known: list[tuple[Optional[str], str]]
    ) -> ConflictBreakdown:
        """Add cross-jurisdiction indicators to a baseline breakdown.

        Args:
            breakdown: Breakdown holding the baseline signals.
            known: (category, jurisdiction) pairs for citations whose
                jurisdiction is known.

        Returns:
            ConflictBreakdown: A new breakdown with the jurisdiction signals set.
        """
        # Distinct jurisdictions, in first-seen order
        unique = list(dict.fromkeys(jur for _, jur in known))

        jurisdictions_by_category: dict[str, set[str]] = {}
        for category, jurisdiction in known:
            if category:
                jurisdictions_by_category.setdefault(category, set()).add(jurisdiction)

        cross_categories = sum(
            self.CROSS_JURISDICTION_CATEGORY_WEIGHT
            for jurs in jurisdictions_by_category.values()
            if len(jurs) >= 2
        )

        multi = 0
        g7_cross_border = 0
        stringency_divergence = 0
        eu_non_eu = 0

        if len(unique) > 1:
            multi = self.MULTI_JURISDICTION_WEIGHT
            g7 = [j for j in unique if j in self.g7_jurisdictions]

            if len(g7) > 1:
                g7_cross_border = self.G7_CROSS_BORDER_WEIGHT

                ranks = [self.stringency.get(j, self.DEFAULT_STRINGENCY) for j in g7]
                if max(ranks) - min(ranks) >= self.STRINGENCY_SPREAD_THRESHOLD:
                    stringency_divergence = self.STRINGENCY_DIVERGENCE_WEIGHT

            has_eu = any(j in self.eu_aligned for j in g7)
            has_non_eu = any(j in self.non_eu for j in g7)
            if has_eu and has_non_eu:
                eu_non_eu = self.EU_NON_EU_WEIGHT

        return ConflictBreakdown(
            citation_count=breakdown.citation_count,
            category_overlap=breakdown.category_overlap,
            definitional_divergence=breakdown.definitional_divergence,
            qualifying_terms=breakdown.qualifying_terms,
            cross_jurisdiction_categories=cross_categories,
            multi_jurisdiction=multi,
            g7_cross_border=g7_cross_border,
            stringency_divergence=stringency_divergence,
            eu_non_eu=eu_non_eu,
            jurisdictions=tuple(unique),
        )

    @staticmethod
    def _category_of(citation: Citation, by_id: dict[str, LegalProvision]) -> Optional[str]:
        if citation.category:
            return citation.category
        provision = by_id.get(citation.id)
        return provision.category if provision else None

    @staticmethod
    def _jurisdiction_of(citation: Citation, by_id: dict[str, LegalProvision]) -> Optional[str]:
        if citation.jurisdiction:
            return citation.jurisdiction
        provision = by_id.get(citation.id)
        return provision.jurisdiction if provision else None
