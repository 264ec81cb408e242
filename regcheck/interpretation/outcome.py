"""
Eligibility outcome classification.

Combines citation language, the conflict score and exception markers
into one of three outcomes with a rationale. Uncertainty is checked
before any eligibility signal, so qualified or conflicting provisions
always yield Requires More Data.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..models import (
    BiasFlag,
    Citation,
    InterpretationResult,
    Outcome,
    RetrievalResult,
)
from .bias import BiasDetector
from .misuse import MisuseDetector
from .principles import Principle


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndicatorTally:
    """Per-citation signal counts used for the decision."""

    eligibility: int = 0
    ineligibility: int = 0
    uncertainty: int = 0
    has_exceptions: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'eligibility': self.eligibility,
            'ineligibility': self.ineligibility,
            'uncertainty': self.uncertainty,
            'has_exceptions': self.has_exceptions
        }


class OutcomeClassifier:
    """
    Decides the eligibility outcome for a set of citations.

    Decision order (first match wins):
    1. uncertainty > 2 or conflict >= 8 -> Requires More Data
    2. ineligibility > eligibility -> Not Eligible
    3. eligibility > 0 -> Eligible
    4. otherwise -> Requires More Data
    """

    ELIGIBILITY_TERMS = ('eligible', 'entitled', 'qualifies')
    INELIGIBILITY_TERMS = ('not eligible', 'ineligible', 'excluded', 'prohibited', 'disqualified')
    UNCERTAINTY_TERMS = ('may', 'discretion', 'case-by-case', 'subject to review', 'upon approval')
    EXCEPTION_MARKERS = ('except', 'unless', 'provided that')

    EXCEPTION_UNCERTAINTY = 2
    HIGH_CONFLICT_UNCERTAINTY = 3
    HIGH_CONFLICT_THRESHOLD = 7
    UNRESOLVABLE_CONFLICT_THRESHOLD = 8
    UNCERTAINTY_LIMIT = 2

    def __init__(
        self,
        bias_detector: Optional[BiasDetector] = None,
        eligibility_terms: Optional[Iterable[str]] = None,
        ineligibility_terms: Optional[Iterable[str]] = None,
        uncertainty_terms: Optional[Iterable[str]] = None,
        exception_markers: Optional[Iterable[str]] = None
    ):
        self.bias_detector = bias_detector or BiasDetector()
        self.eligibility_terms = tuple(
            self.ELIGIBILITY_TERMS if eligibility_terms is None else eligibility_terms
        )
        self.ineligibility_terms = tuple(
            self.INELIGIBILITY_TERMS if ineligibility_terms is None else ineligibility_terms
        )
        self.uncertainty_terms = tuple(
            self.UNCERTAINTY_TERMS if uncertainty_terms is None else uncertainty_terms
        )
        self.exception_markers = tuple(
            self.EXCEPTION_MARKERS if exception_markers is None else exception_markers
        )

    def classify(
        self,
        citations: Sequence[Citation],
        conflict_score: int,
        query: str
    ) -> InterpretationResult:
        """
        Classify the outcome for the citations.

        Args:
            citations: Top citations from retrieval
            conflict_score: Conflict score of those citations
            query: Raw user query

        Returns:
            InterpretationResult with outcome, rationale and bias flag
        """
        if not citations:
            return InterpretationResult(
                final_outcome=Outcome.REQUIRES_MORE_DATA,
                rationale_summary=(
                    "No relevant legal citations were found in the knowledge base. "
                    f"{Principle.TRANSPARENCY.value} - additional information or "
                    "clarification of the query is required to provide a determination."
                ),
                bias_flag=BiasFlag.NO,
            )

        texts = [c.citation_text.lower() for c in citations]
        bias_flag = self.bias_detector.detect(texts, query)
        tally = self.tally(texts, conflict_score)

        unresolved = self._is_unresolved(tally, conflict_score)
        outcome = self._decide(tally, unresolved)
        rationale = self._rationale(outcome, unresolved, citations, conflict_score)

        logger.debug(f"Indicator tally {tally.to_dict()} -> {outcome.value}")

        return InterpretationResult(
            final_outcome=outcome,
            rationale_summary=rationale,
            bias_flag=bias_flag,
        )

    def tally(self, texts: Sequence[str], conflict_score: int) -> IndicatorTally:
        """Count eligibility, ineligibility and uncertainty signals.

        Each citation text contributes at most one to each count; exception
        markers and a high conflict score add fixed uncertainty.

        Args:
            texts: Lower-cased citation texts.
            conflict_score: Conflict score of the citations.

        Returns:
            IndicatorTally: The signal counts.
        """
        eligibility = 0
        ineligibility = 0
        uncertainty = 0

        for text in texts:
            if any(t in text for t in self.eligibility_terms):
                eligibility += 1
            if any(t in text for t in self.ineligibility_terms):
                ineligibility += 1
            if any(t in text for t in self.uncertainty_terms):
                uncertainty += 1

        has_exceptions = any(
            marker in text for text in texts for marker in self.exception_markers
        )
        if has_exceptions:
            uncertainty += self.EXCEPTION_UNCERTAINTY

        if conflict_score >= self.HIGH_CONFLICT_THRESHOLD:
            uncertainty += self.HIGH_CONFLICT_UNCERTAINTY

        return IndicatorTally(
            eligibility=eligibility,
            ineligibility=ineligibility,
            uncertainty=uncertainty,
            has_exceptions=has_exceptions,
        )

    def _is_unresolved(self, tally: IndicatorTally, conflict_score: int) -> bool:
        """Too much uncertainty or conflict for a definitive outcome."""
        return (tally.uncertainty > self.UNCERTAINTY_LIMIT
                or conflict_score >= self.UNRESOLVABLE_CONFLICT_THRESHOLD)

    def _decide(self, tally: IndicatorTally, unresolved: bool) -> Outcome:
        if unresolved:
            return Outcome.REQUIRES_MORE_DATA
        if tally.ineligibility > tally.eligibility:
            return Outcome.NOT_ELIGIBLE
        if tally.eligibility > 0:
            return Outcome.ELIGIBLE
        return Outcome.REQUIRES_MORE_DATA

    def _rationale(
        self,
        outcome: Outcome,
        unresolved: bool,
        citations: Sequence[Citation],
        conflict_score: int
    ) -> str:
        count = len(citations)
        sections = ", ".join(c.section_id for c in citations[:2])

        if outcome == Outcome.NOT_ELIGIBLE:
            return (
                f"Based on {count} legal citations, the analysis indicates ineligibility. "
                "The relevant provisions contain explicit exclusions or prohibitions that apply "
                f"to the query circumstances. Review sections {sections} for full details."
            )

        if outcome == Outcome.ELIGIBLE:
            complexity = "low" if conflict_score < 5 else "moderate"
            return (
                f"The analysis of {count} legal sections indicates eligibility under the cited "
                "provisions. The relevant legal framework supports this determination with a "
                f"conflict score of {conflict_score}/10, indicating {complexity} internal "
                f"complexity. Refer to sections {sections} for the legal basis."
            )

        if unresolved:
            return (
                f"The analysis identified {count} relevant legal sections with a conflict score "
                f"of {conflict_score}/10. The cited provisions contain conditional language, "
                "exceptions, or conflicting requirements that prevent a definitive determination. "
                "Manual review by a compliance officer is recommended to assess the specific "
                "circumstances."
            )

        return (
            f"The {count} retrieved legal citations do not provide sufficient clarity for a "
            f"definitive determination. The conflict score of {conflict_score}/10 suggests "
            "complex or ambiguous provisions. Additional context or expert legal interpretation "
            "is required."
        )


class Interpreter:
    """
    Runs the interpretation stage: misuse check first, then classification.

    A misuse match ends interpretation immediately with Requires More Data
    and no bias assessment.
    """

    def __init__(
        self,
        misuse_detector: Optional[MisuseDetector] = None,
        classifier: Optional[OutcomeClassifier] = None
    ):
        self.misuse_detector = misuse_detector or MisuseDetector()
        self.classifier = classifier or OutcomeClassifier()

    def interpret(self, retrieval: RetrievalResult, query: str) -> InterpretationResult:
        """
        Interpret a retrieval result for a query.

        Args:
            retrieval: Output of the retrieval stage
            query: Raw user query

        Returns:
            InterpretationResult
        """
        check = self.misuse_detector.check(query)
        if check.is_misuse:
            logger.info(f"Misuse intent detected (matched {check.matched_phrase!r})")
            return InterpretationResult(
                final_outcome=Outcome.REQUIRES_MORE_DATA,
                rationale_summary=self.misuse_detector.refusal_rationale(check),
                bias_flag=BiasFlag.NO,
                misuse_detected=True,
            )

        return self.classifier.classify(
            retrieval.top_citations,
            retrieval.conflict_score,
            query,
        )
