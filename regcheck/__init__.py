"""
regcheck - A legal compliance research tool that answers eligibility
questions from a corpus of legal provisions, with traceable citations,
conflict scoring, and bias and misuse safeguards.

Determinations are informational and are not legal advice.
"""

from .exceptions import (
    RegCheckError,
    ConfigurationError,
    DocumentStoreError,
    RetrievalError,
)
from .models import (
    LegalProvision,
    Citation,
    RetrievalResult,
    InterpretationResult,
    FormattedOutput,
    AnalysisResult,
    Outcome,
    BiasFlag,
    DocumentType,
)
from .pipeline import ComplianceAnalyzer

__version__ = "0.1.0"
__author__ = "regcheck Team"

__all__ = [
    "RegCheckError",
    "ConfigurationError",
    "DocumentStoreError",
    "RetrievalError",
    "LegalProvision",
    "Citation",
    "RetrievalResult",
    "InterpretationResult",
    "FormattedOutput",
    "AnalysisResult",
    "Outcome",
    "BiasFlag",
    "DocumentType",
    "ComplianceAnalyzer",
]
