"""
Traceable rendering of analysis results.

Produces the user-facing determination text and checks that any
actionable outcome is backed by complete citations:
- Conclusion heading
- Interpretation paragraph
- Legal basis with numbered citations
- Compliance notes (conflict, bias, traceability warnings)
"""

import logging
from typing import Optional, Sequence

from ..models import (
    BiasFlag,
    Citation,
    FormattedOutput,
    InterpretationResult,
    Outcome,
    RetrievalResult,
)


logger = logging.getLogger(__name__)


class TraceabilityFormatter:
    """
    Formats retrieval and interpretation results into a FormattedOutput.

    Malformed citations never raise; they only clear the traceability
    flag and add a compliance note.
    """

    JURISDICTION_PREFIXES = {
        'CA-': 'Canada',
        'DE-': 'Germany',
        'EU-': 'European Union',
        'FR-': 'France',
        'IT-': 'Italy',
        'JP-': 'Japan',
        'UK-': 'United Kingdom',
        'US-': 'United States',
    }

    CONCLUSIONS = {
        Outcome.ELIGIBLE: '**DETERMINATION: ELIGIBLE**',
        Outcome.NOT_ELIGIBLE: '**DETERMINATION: NOT ELIGIBLE**',
        Outcome.REQUIRES_MORE_DATA: '**DETERMINATION: ADDITIONAL REVIEW REQUIRED**',
    }
    PENDING_CONCLUSION = '**DETERMINATION: PENDING**'

    PREAMBLES = {
        Outcome.ELIGIBLE: (
            'Based on the applicable legal framework, the determination supports eligibility. '
        ),
        Outcome.NOT_ELIGIBLE: (
            'After careful review of the relevant regulations, the current circumstances '
            'do not meet the eligibility criteria. '
        ),
        Outcome.REQUIRES_MORE_DATA: (
            'The legal framework applicable to this query contains complex provisions '
            'requiring additional assessment. '
        ),
    }

    NO_CITATIONS_MESSAGE = 'No specific legal citations were identified for this query.'

    HIGH_CONFLICT_THRESHOLD = 7

    def __init__(
        self,
        jurisdiction_prefixes: Optional[dict[str, str]] = None,
        excerpt_length: int = 200
    ):
        """
        Initialize formatter.

        Args:
            jurisdiction_prefixes: Replacement for JURISDICTION_PREFIXES
            excerpt_length: Maximum citation text characters shown per citation
        """
        self.jurisdiction_prefixes = dict(
            self.JURISDICTION_PREFIXES if jurisdiction_prefixes is None else jurisdiction_prefixes
        )
        self.excerpt_length = excerpt_length

    def format(
        self,
        retrieval: RetrievalResult,
        interpretation: InterpretationResult
    ) -> FormattedOutput:
        """
        Render the final output.

        Args:
            retrieval: Retrieval stage result
            interpretation: Interpretation stage result

        Returns:
            FormattedOutput carrying the retrieval citations unchanged
        """
        outcome = interpretation.final_outcome
        citations = retrieval.top_citations

        compliant = self.is_traceable(outcome, citations)
        if not compliant:
            logger.warning(
                f"{outcome.value} determination has incomplete citations; "
                "marking output as not traceable"
            )

        sections = [
            self.format_conclusion(outcome),
            self.format_interpretation(interpretation.rationale_summary, outcome),
            self.format_legal_basis(citations),
        ]

        notes = self.compliance_notes(retrieval.conflict_score, interpretation.bias_flag, compliant)
        if notes:
            sections.append(self.format_compliance_notes(notes))

        return FormattedOutput(
            display_text="\n\n".join(sections),
            outcome=outcome,
            citations=citations,
            traceability_compliant=compliant,
            jurisdictions_referenced=self.extract_jurisdictions(citations),
        )

    def is_traceable(self, outcome: Outcome, citations: Sequence[Citation]) -> bool:
        """Check that an actionable outcome is backed by complete citations.

        Requires More Data is always traceable because it makes no claim.
        Eligible and Not Eligible need a non-blank section id and citation
        text on every citation.

        Args:
            outcome: The determination.
            citations: Citations supporting it.

        Returns:
            bool: Whether the output is traceability compliant.
        """
        if outcome == Outcome.REQUIRES_MORE_DATA:
            return True
        return all(
            (c.section_id or "").strip() and (c.citation_text or "").strip()
            for c in citations
        )

    def extract_jurisdictions(self, citations: Sequence[Citation]) -> frozenset[str]:
        """Map section id prefixes to jurisdiction names."""
        found = set()
        for citation in citations:
            section_id = citation.section_id or ""
            for prefix, name in self.jurisdiction_prefixes.items():
                if section_id.startswith(prefix):
                    found.add(name)
                    break
        return frozenset(found)

    def format_conclusion(self, outcome: Outcome) -> str:
        return self.CONCLUSIONS.get(outcome, self.PENDING_CONCLUSION)

    def format_interpretation(self, rationale: str, outcome: Outcome) -> str:
        return f"{self.PREAMBLES.get(outcome, '')}{rationale}"

    def format_legal_basis(self, citations: Sequence[Citation]) -> str:
        """Render the numbered citation list, or the no-citations message."""
        if not citations:
            return f"**LEGAL BASIS**\n\n{self.NO_CITATIONS_MESSAGE}"

        entries = []
        for index, citation in enumerate(citations, start=1):
            text = citation.citation_text or ""
            excerpt = text[:self.excerpt_length]
            if len(text) > self.excerpt_length:
                excerpt += '...'
            entries.append(
                f"{index}. **{citation.section_id}** - {citation.title}\n   \"{excerpt}\""
            )

        return (
            "**LEGAL BASIS**\n\n"
            "The following legal provisions form the basis for this determination:\n\n"
            + "\n\n".join(entries)
        )

    def compliance_notes(
        self,
        conflict_score: int,
        bias_flag: BiasFlag,
        traceability_compliant: bool
    ) -> list[str]:
        """Warnings to surface, in display order."""
        notes = []

        if conflict_score >= self.HIGH_CONFLICT_THRESHOLD:
            notes.append(
                f"HIGH CONFLICT: The cited provisions have a conflict score of {conflict_score}/10. "
                "They qualify or contradict one another; manual review by a compliance officer "
                "is recommended."
            )

        if bias_flag == BiasFlag.YES:
            notes.append(
                "BIAS REVIEW: Protected-characteristic language was detected outside a "
                "non-discrimination context. Decisions must be applied without discriminatory "
                "consideration."
            )

        if not traceability_compliant:
            notes.append(
                "TRACEABILITY: One or more citations lack a section identifier or citation text. "
                "This determination is not fully traceable to its legal basis."
            )

        return notes

    def format_compliance_notes(self, notes: Sequence[str]) -> str:
        return "**COMPLIANCE NOTES**\n\n" + "\n".join(f"- {note}" for note in notes)
