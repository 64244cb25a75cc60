"""Per-chiller polynomial regression models for plant power.

Each model predicts TOTAL plant power (kW) from the running chiller's
evaporator leaving water temperature, its condenser entering water
temperature, and the plant cooling rate. A model is only valid while its
chiller is the single chiller running; the fits do not cover multi-chiller
operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import numpy as np
import numpy.typing as npt

from thermotrace.domain.models import ChillerId


FloatArray = npt.NDArray[np.float64]

NUM_POLYNOMIAL_FEATURES = 9
DEVIATION_RMSE_MULTIPLIER = 2.0


@dataclass(frozen=True, slots=True)
class ChillerModelCoefficients:
    """Fitted degree-2 regression for one chiller."""

    intercept: float
    coefficients: tuple[float, ...]
    rmse: float
    r2: float
    training_samples: int

    def __post_init__(self) -> None:
        if len(self.coefficients) != NUM_POLYNOMIAL_FEATURES:
            raise ValueError(f"coefficients must contain exactly {NUM_POLYNOMIAL_FEATURES} values")
        if self.rmse <= 0.0:
            raise ValueError("rmse must be > 0")
        if self.training_samples <= 0:
            raise ValueError("training_samples must be > 0")

    def as_vector(self) -> FloatArray:
        return np.asarray(self.coefficients, dtype=np.float64)


@dataclass(frozen=True, slots=True)
class ModelStats:
    """Reported goodness-of-fit for one chiller model."""

    rmse: float
    r2: float


@dataclass(frozen=True, slots=True)
class PowerDeviation:
    """Actual-vs-predicted power comparison against the 2x RMSE band."""

    is_deviation: bool
    error_percent: float
    error_absolute: float


# Coefficient order: evap, cond, cooling, evap^2, evap*cond, evap*cooling,
# cond^2, cond*cooling, cooling^2.
CHILLER_MODELS: Mapping[ChillerId, ChillerModelCoefficients] = MappingProxyType(
    {
        ChillerId.ONE: ChillerModelCoefficients(
            intercept=4721.09,
            coefficients=(
                -8.078101,
                -122.343705,
                2.216326,
                -0.189299,
                0.326569,
                0.002742,
                0.765678,
                -0.033574,
                0.001007,
            ),
            rmse=13.20,
            r2=0.8522,
            training_samples=6551,
        ),
        ChillerId.TWO: ChillerModelCoefficients(
            intercept=2285.38,
            coefficients=(
                17.175637,
                -69.869946,
                0.979994,
                -0.024797,
                -0.197040,
                0.005032,
                0.523248,
                -0.007353,
                -0.000037,
            ),
            rmse=12.32,
            r2=0.8733,
            training_samples=3857,
        ),
        ChillerId.THREE: ChillerModelCoefficients(
            intercept=1503.01,
            coefficients=(
                -52.879134,
                -10.888671,
                1.547344,
                0.125490,
                0.657254,
                -0.039538,
                -0.109687,
                -0.001288,
                0.001866,
            ),
            rmse=4.69,
            r2=0.9792,
            training_samples=455,
        ),
    }
)


def polynomial_features(evap_temp: float, cond_temp: float, cooling_rate: float) -> FloatArray:
    """Expand raw inputs into bias-free degree-2 polynomial features.

    ``[x1, x2, x3] -> [x1, x2, x3, x1^2, x1*x2, x1*x3, x2^2, x2*x3, x3^2]``
    """
    x1, x2, x3 = float(evap_temp), float(cond_temp), float(cooling_rate)
    return np.asarray(
        (
            x1,
            x2,
            x3,
            x1 * x1,
            x1 * x2,
            x1 * x3,
            x2 * x2,
            x2 * x3,
            x3 * x3,
        ),
        dtype=np.float64,
    )


def predict_power(
    evap_temp: float,
    cond_temp: float,
    cooling_rate: float,
    model: ChillerModelCoefficients,
) -> float:
    """Predict plant power in kW. Inputs outside the training envelope are not rejected."""
    features = polynomial_features(evap_temp, cond_temp, cooling_rate)
    return float(model.intercept + features @ model.as_vector())


def predict_chiller_power(
    chiller_id: ChillerId | int,
    evap_temp: float,
    cond_temp: float,
    cooling_rate: float,
) -> float:
    """Predict plant power assuming only ``chiller_id`` is running."""
    return predict_power(evap_temp, cond_temp, cooling_rate, CHILLER_MODELS[ChillerId(chiller_id)])


def predict_chiller1_power(evap_temp: float, cond_temp: float, cooling_rate: float) -> float:
    """Plant power when only chiller 1 (500 tons) runs."""
    return predict_chiller_power(ChillerId.ONE, evap_temp, cond_temp, cooling_rate)


def predict_chiller2_power(evap_temp: float, cond_temp: float, cooling_rate: float) -> float:
    """Plant power when only chiller 2 (500 tons) runs."""
    return predict_chiller_power(ChillerId.TWO, evap_temp, cond_temp, cooling_rate)


def predict_chiller3_power(evap_temp: float, cond_temp: float, cooling_rate: float) -> float:
    """Plant power when only chiller 3 (375 tons) runs."""
    return predict_chiller_power(ChillerId.THREE, evap_temp, cond_temp, cooling_rate)


def get_model_stats(chiller_id: ChillerId | int) -> ModelStats:
    model = CHILLER_MODELS[ChillerId(chiller_id)]
    return ModelStats(rmse=model.rmse, r2=model.r2)


def check_power_deviation(actual_power: float, predicted_power: float, rmse: float) -> PowerDeviation:
    """Flag errors beyond 2x RMSE, the 95% band under normally distributed residuals."""
    error_absolute = abs(actual_power - predicted_power)
    error_percent = error_absolute / predicted_power * 100.0 if predicted_power != 0 else float("inf")
    return PowerDeviation(
        is_deviation=error_absolute > DEVIATION_RMSE_MULTIPLIER * rmse,
        error_percent=error_percent,
        error_absolute=error_absolute,
    )
