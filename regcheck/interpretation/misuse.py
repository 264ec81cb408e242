"""
Misuse-intent detection for user queries.

Flags queries that ask for help circumventing legal or safety
restrictions. Detection runs on the raw query before any legal analysis
and a positive result ends interpretation for that query.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .principles import Principle


@dataclass(frozen=True)
class MisuseCheck:
    """Result of a misuse check."""

    is_misuse: bool
    reason: str = ""
    matched_phrase: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'is_misuse': self.is_misuse,
            'reason': self.reason,
            'matched_phrase': self.matched_phrase
        }


class MisuseDetector:
    """
    Detects circumvention intent in a query.

    A query is flagged when it contains a misuse phrase, or when it pairs
    safety/restriction vocabulary with a request for suggested steps or
    ways.
    """

    MISUSE_PHRASES = (
        'circumvent',
        'bypass',
        'avoid restriction',
        'unauthorized',
        'illegal',
        'exploit',
        'loophole',
        'get around',
        'work around',
        'evade',
        'minimum steps to',
        'how to violate',
    )

    SAFETY_CONTEXT_TERMS = ('safety', 'restriction', 'prohibited')
    SUGGESTION_TERM = 'suggest'
    METHOD_TERMS = ('step', 'way')

    def __init__(
        self,
        misuse_phrases: Optional[Iterable[str]] = None,
        safety_context_terms: Optional[Iterable[str]] = None,
        suggestion_term: Optional[str] = None,
        method_terms: Optional[Iterable[str]] = None
    ):
        """
        Initialize detector.

        Args:
            misuse_phrases: Replacement for MISUSE_PHRASES
            safety_context_terms: Replacement for SAFETY_CONTEXT_TERMS
            suggestion_term: Replacement for SUGGESTION_TERM
            method_terms: Replacement for METHOD_TERMS
        """
        self.misuse_phrases = tuple(
            p.lower() for p in (self.MISUSE_PHRASES if misuse_phrases is None else misuse_phrases)
        )
        self.safety_context_terms = tuple(
            t.lower() for t in (
                self.SAFETY_CONTEXT_TERMS if safety_context_terms is None else safety_context_terms
            )
        )
        self.suggestion_term = (
            self.SUGGESTION_TERM if suggestion_term is None else suggestion_term
        ).lower()
        self.method_terms = tuple(
            t.lower() for t in (self.METHOD_TERMS if method_terms is None else method_terms)
        )

    def check(self, query: str) -> MisuseCheck:
        """
        Check a query for misuse intent.

        Args:
            query: Raw user query

        Returns:
            MisuseCheck; ``is_misuse`` is False for empty or benign queries
        """
        query_lower = (query or "").lower()

        for phrase in self.misuse_phrases:
            if phrase in query_lower:
                return MisuseCheck(
                    is_misuse=True,
                    reason=(
                        f'Query contains potential misuse language ("{phrase}"). '
                        f"Per the Safety Principle, interpretation for circumvention is not provided."
                    ),
                    matched_phrase=phrase,
                )

        has_safety_context = any(t in query_lower for t in self.safety_context_terms)
        asks_for_method = (
            self.suggestion_term in query_lower
            and any(t in query_lower for t in self.method_terms)
        )

        if has_safety_context and asks_for_method:
            return MisuseCheck(
                is_misuse=True,
                reason=(
                    "Query appears to seek guidance on circumventing safety restrictions. "
                    "Per the Safety Principle, such interpretation is declined."
                ),
                matched_phrase=self.suggestion_term,
            )

        return MisuseCheck(is_misuse=False)

    def refusal_rationale(self, check: MisuseCheck) -> str:
        """Rationale shown to the user for a refused query."""
        return (
            f"{check.reason} {Principle.SAFETY.value}. "
            "Please reformulate your query to request legitimate legal interpretation."
        )
