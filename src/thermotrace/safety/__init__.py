"""Physical-limit violations and model-disagreement anomalies."""

from thermotrace.safety.checker import ViolationChecker, check_violations
from thermotrace.safety.contracts import ValidationResult, ValidationThresholds

__all__ = ["ValidationResult", "ValidationThresholds", "ViolationChecker", "check_violations"]
