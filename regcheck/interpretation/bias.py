"""
Protected-characteristic bias detection.

Flags queries and provisions that bring protected characteristics (age,
gender, nationality, ...) into an eligibility question outside a
recognized non-discrimination context. Legal context and legitimate
eligibility questions suppress the flag to keep false positives down.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import BiasFlag


@dataclass(frozen=True)
class BiasAssessment:
    """Outcome of a bias check."""

    flag: BiasFlag
    trigger_term: Optional[str] = None
    has_legal_context: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'flag': self.flag.value,
            'trigger_term': self.trigger_term,
            'has_legal_context': self.has_legal_context
        }


class BiasDetector:
    """
    Detects protected-characteristic exposure in query and citation text.
    """

    PROTECTED_TERMS = (
        'race', 'racial', 'ethnicity', 'ethnic', 'color', 'colour',
        'gender', 'sex', 'male', 'female', 'man', 'woman', 'women',
        'religion', 'religious', 'belief', 'faith',
        'national origin', 'nationality', 'citizenship',
        'age', 'disability', 'disabled', 'disabilities',
        'sexual orientation', 'marital status',
        'pregnancy', 'pregnant',
        'veteran status', 'genetic information', 'family status',
        'socioeconomic', 'class', 'caste',
    )

    # Phrases showing protected terms are used in a non-discrimination sense
    LEGAL_CONTEXT_PHRASES = (
        'without regard to',
        'regardless of',
        'prohibited',
        'discrimination',
        'protected class',
        'non-discriminatory',
        'equal treatment',
        'anti-discrimination',
        'civil rights',
        'human rights',
        'fundamental rights',
    )

    LEGITIMATE_QUESTION_PATTERNS = (
        'am i eligible',
        'what are the requirements',
        'how does',
        'what is the',
    )

    COMPARATIVE_PHRASES = ('more likely', 'less likely')

    def __init__(
        self,
        protected_terms: Optional[Iterable[str]] = None,
        legal_context_phrases: Optional[Iterable[str]] = None,
        legitimate_question_patterns: Optional[Iterable[str]] = None,
        comparative_phrases: Optional[Iterable[str]] = None
    ):
        """
        Initialize detector.

        Args:
            protected_terms: Replacement for PROTECTED_TERMS
            legal_context_phrases: Replacement for LEGAL_CONTEXT_PHRASES
            legitimate_question_patterns: Replacement for LEGITIMATE_QUESTION_PATTERNS
            comparative_phrases: Replacement for COMPARATIVE_PHRASES
        """
        terms = self.PROTECTED_TERMS if protected_terms is None else protected_terms
        self.protected_terms = tuple(t.lower() for t in terms)
        self.legal_context_phrases = tuple(p.lower() for p in (
            self.LEGAL_CONTEXT_PHRASES if legal_context_phrases is None else legal_context_phrases
        ))
        self.legitimate_question_patterns = tuple(p.lower() for p in (
            self.LEGITIMATE_QUESTION_PATTERNS
            if legitimate_question_patterns is None else legitimate_question_patterns
        ))
        self.comparative_phrases = tuple(p.lower() for p in (
            self.COMPARATIVE_PHRASES if comparative_phrases is None else comparative_phrases
        ))

    def detect(self, citation_texts: Iterable[str], query: str) -> BiasFlag:
        """
        Return the bias flag for a query and its citation texts.

        Args:
            citation_texts: Texts of the retrieved citations
            query: Raw user query

        Returns:
            BiasFlag.YES or BiasFlag.NO
        """
        return self.assess(citation_texts, query).flag

    def assess(self, citation_texts: Iterable[str], query: str) -> BiasAssessment:
        """
        Assess bias exposure and report which term triggered the flag.

        Args:
            citation_texts: Texts of the retrieved citations
            query: Raw user query

        Returns:
            BiasAssessment with the flag and the first triggering term
        """
        query_lower = (query or "").lower()
        combined = (" ".join(citation_texts) + " " + query_lower).lower()

        has_legal_context = any(p in combined for p in self.legal_context_phrases)
        if has_legal_context:
            return BiasAssessment(flag=BiasFlag.NO, has_legal_context=True)

        is_legitimate_question = any(
            p in query_lower for p in self.legitimate_question_patterns
        )
        has_comparison = any(p in combined for p in self.comparative_phrases)

        for term in self.protected_terms:
            if term not in combined:
                continue
            if not is_legitimate_question or has_comparison:
                return BiasAssessment(flag=BiasFlag.YES, trigger_term=term)

        return BiasAssessment(flag=BiasFlag.NO)
