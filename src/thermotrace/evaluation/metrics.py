"""Prediction accuracy and error metrics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import numpy as np
import numpy.typing as npt


FloatArray = npt.NDArray[np.float64]


class AccuracyLevel(StrEnum):
    """Qualitative accuracy bands."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


ACCURACY_BANDS: tuple[tuple[float, AccuracyLevel], ...] = (
    (95.0, AccuracyLevel.EXCELLENT),
    (85.0, AccuracyLevel.GOOD),
    (70.0, AccuracyLevel.FAIR),
)


@dataclass(frozen=True, slots=True)
class DifferenceStats:
    """Signed comparison of one prediction with its observation."""

    absolute: float
    percentage: float
    is_over_predicted: bool
    is_under_predicted: bool


def calculate_accuracy(predicted: float, actual: float) -> float:
    """Percent accuracy ``100 - |error| / actual * 100``, floored at 0."""
    if actual == 0:
        return 0.0
    percentage_error = abs(predicted - actual) / actual * 100.0
    return max(0.0, 100.0 - percentage_error)


def validate_prediction(predicted: float, actual: float, threshold: float = 10.0) -> bool:
    return calculate_accuracy(predicted, actual) >= threshold


def accuracy_level(accuracy: float) -> AccuracyLevel:
    for lower_bound, level in ACCURACY_BANDS:
        if accuracy >= lower_bound:
            return level
    return AccuracyLevel.POOR


def difference_stats(predicted: float, actual: float) -> DifferenceStats:
    difference = actual - predicted
    percentage = 0.0 if predicted == 0 else difference / predicted * 100.0
    return DifferenceStats(
        absolute=abs(difference),
        percentage=percentage,
        is_over_predicted=difference < 0,
        is_under_predicted=difference > 0,
    )


def mean_absolute_error(predictions: npt.ArrayLike, actuals: npt.ArrayLike) -> float:
    y_pred, y_true = _paired_vectors(predictions, actuals)
    return float(np.mean(np.abs(y_pred - y_true)))


def root_mean_square_error(predictions: npt.ArrayLike, actuals: npt.ArrayLike) -> float:
    y_pred, y_true = _paired_vectors(predictions, actuals)
    return float(np.sqrt(np.mean(np.square(y_pred - y_true))))


def _paired_vectors(predictions: npt.ArrayLike, actuals: npt.ArrayLike) -> tuple[FloatArray, FloatArray]:
    y_pred = np.asarray(predictions, dtype=np.float64)
    y_true = np.asarray(actuals, dtype=np.float64)
    if y_pred.ndim != 1 or y_true.ndim != 1:
        raise ValueError("predictions and actuals must be 1D")
    if y_pred.shape != y_true.shape:
        raise ValueError("predictions and actuals must have same shape")
    if y_pred.size == 0:
        raise ValueError("predictions and actuals must not be empty")
    return y_pred, y_true
