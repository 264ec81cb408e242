"""
Governing principles quoted in interpretation rationales.
"""

from enum import Enum


class Principle(Enum):
    """Principles every determination is held to."""
    FAIRNESS = "Decisions must be applied without discriminatory consideration"
    SAFETY = "AI must not facilitate misuse, harm, or circumvention of safety measures"
    TRANSPARENCY = "All determinations must be explainable with clear legal basis"
    HUMAN_RIGHTS = "Protected characteristics must be handled in legal context only"
