"""
Core data model for the compliance analysis pipeline.

Every entity is created fresh per query and is never mutated afterwards,
so all dataclasses here are frozen and use tuples for sequences.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from .exceptions import DocumentStoreError


ELIGIBILITY = "Eligibility"
DEFINITIONS = "Definitions"
EXCEPTIONS = "Exceptions"

# Categories requested from the document store for every query
CANDIDATE_CATEGORIES = (ELIGIBILITY, DEFINITIONS, EXCEPTIONS)


class DocumentType(Enum):
    """Kinds of legal source documents."""
    LEGAL_ACT = "Legal Act"
    REGULATION = "Regulation"
    POLICY = "Policy"


class Outcome(Enum):
    """Terminal eligibility outcomes."""
    ELIGIBLE = "Eligible"
    NOT_ELIGIBLE = "Not Eligible"
    REQUIRES_MORE_DATA = "Requires More Data"


class BiasFlag(Enum):
    """Protected-characteristic exposure flag."""
    YES = "YES"
    NO = "NO"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise DocumentStoreError(f"Invalid effective date: {value!r}") from e


@dataclass(frozen=True)
class LegalProvision:
    """A legal provision record as supplied by the document store."""

    id: str
    document_type: DocumentType
    title: str
    section_id: str
    citation_text: str
    category: str
    jurisdiction: str
    effective_date: Optional[date] = None
    metadata: dict = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        for name in ('title', 'section_id', 'citation_text'):
            object.__setattr__(self, name, _text(getattr(self, name)))

    @classmethod
    def from_record(cls, record: dict) -> "LegalProvision":
        """Build a provision from a raw store record.

        Accepts the snake_case column names used by the store, ISO-8601 date
        strings and the display names of the document types. A missing or
        null section_id or citation_text becomes an empty string; such
        provisions are reported as not traceable downstream.

        Args:
            record: Mapping with at least id, document_type, title, category
                and jurisdiction keys.

        Returns:
            LegalProvision: The parsed provision.

        Raises:
            DocumentStoreError: If a required field is missing or a value
                cannot be parsed.
        """
        try:
            document_type = DocumentType(record["document_type"])
            return cls(
                id=str(record["id"]),
                document_type=document_type,
                title=record["title"],
                section_id=record.get("section_id"),
                citation_text=record.get("citation_text"),
                category=record["category"],
                jurisdiction=record["jurisdiction"],
                effective_date=_parse_date(record.get("effective_date")),
                metadata=dict(record.get("metadata") or {}),
            )
        except KeyError as e:
            raise DocumentStoreError(f"Legal document record is missing field {e}") from e
        except ValueError as e:
            raise DocumentStoreError(f"Malformed legal document record: {e}") from e

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'document_type': self.document_type.value,
            'title': self.title,
            'section_id': self.section_id,
            'citation_text': self.citation_text,
            'category': self.category,
            'jurisdiction': self.jurisdiction,
            'effective_date': self.effective_date.isoformat() if self.effective_date else None,
            'metadata': self.metadata
        }


@dataclass(frozen=True)
class Citation:
    """A reference to a provision selected for the answer."""

    id: str
    section_id: str
    title: str
    citation_text: str
    jurisdiction: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self):
        for name in ('title', 'section_id', 'citation_text'):
            object.__setattr__(self, name, _text(getattr(self, name)))

    @classmethod
    def from_provision(cls, provision: LegalProvision) -> "Citation":
        return cls(
            id=provision.id,
            section_id=provision.section_id,
            title=provision.title,
            citation_text=provision.citation_text,
            jurisdiction=provision.jurisdiction,
            category=provision.category,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'section_id': self.section_id,
            'title': self.title,
            'citation_text': self.citation_text,
            'jurisdiction': self.jurisdiction,
            'category': self.category
        }


@dataclass(frozen=True)
class RetrievalResult:
    """Ranked citations plus the conflict score computed over them."""

    top_citations: tuple[Citation, ...]
    conflict_score: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'top_citations': [c.to_dict() for c in self.top_citations],
            'conflict_score': self.conflict_score
        }


@dataclass(frozen=True)
class InterpretationResult:
    """Outcome of the interpretation stage."""

    final_outcome: Outcome
    rationale_summary: str
    bias_flag: BiasFlag
    misuse_detected: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'final_outcome': self.final_outcome.value,
            'rationale_summary': self.rationale_summary,
            'bias_flag': self.bias_flag.value,
            'misuse_detected': self.misuse_detected
        }


@dataclass(frozen=True)
class FormattedOutput:
    """User-facing rendering of an analysis."""

    display_text: str
    outcome: Outcome
    citations: tuple[Citation, ...]
    traceability_compliant: bool
    jurisdictions_referenced: frozenset[str]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            dict: All fields, with the outcome as its string value and the
                referenced jurisdictions as a sorted list.
        """
        return {
            'display_text': self.display_text,
            'outcome': self.outcome.value,
            'citations': [c.to_dict() for c in self.citations],
            'traceability_compliant': self.traceability_compliant,
            'jurisdictions_referenced': sorted(self.jurisdictions_referenced)
        }


@dataclass(frozen=True)
class AnalysisResult:
    """All three stage results of one pipeline invocation."""

    retrieval: RetrievalResult
    interpretation: InterpretationResult
    output: FormattedOutput

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'retrieval': self.retrieval.to_dict(),
            'interpretation': self.interpretation.to_dict(),
            'output': self.output.to_dict()
        }
