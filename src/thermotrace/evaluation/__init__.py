"""Prediction error metrics and model-fit replay."""

from thermotrace.evaluation.metrics import (
    AccuracyLevel,
    DifferenceStats,
    accuracy_level,
    calculate_accuracy,
    difference_stats,
    mean_absolute_error,
    root_mean_square_error,
    validate_prediction,
)
from thermotrace.evaluation.model_fit import ModelFitReport, evaluate_model_fit

__all__ = [
    "AccuracyLevel",
    "DifferenceStats",
    "ModelFitReport",
    "accuracy_level",
    "calculate_accuracy",
    "difference_stats",
    "evaluate_model_fit",
    "mean_absolute_error",
    "root_mean_square_error",
    "validate_prediction",
]
