"""Interpretation module for misuse, bias and outcome classification."""

from .misuse import MisuseDetector, MisuseCheck
from .bias import BiasDetector, BiasAssessment
from .outcome import OutcomeClassifier, Interpreter, IndicatorTally
from .principles import Principle

__all__ = [
    "MisuseDetector",
    "MisuseCheck",
    "BiasDetector",
    "BiasAssessment",
    "OutcomeClassifier",
    "Interpreter",
    "IndicatorTally",
    "Principle",
]
