"""Single-active-chiller gating for physics-model predictions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from thermotrace.domain.models import ChillerId, ChillerReading, TimestepSnapshot
from thermotrace.physics.regression import CHILLER_MODELS, ChillerModelCoefficients, predict_chiller_power


# Looser than the staging rule (rla > 0): units at transitional load do not
# count as the running chiller.
MODEL_MIN_RLA = 10.0


@dataclass(frozen=True, slots=True)
class ActiveChillerPrediction:
    """Plant power predicted from the one chiller that is running."""

    chiller_id: ChillerId
    predicted_power: float

    @property
    def model(self) -> ChillerModelCoefficients:
        return CHILLER_MODELS[self.chiller_id]


@dataclass(frozen=True, slots=True)
class PredictedEfficiency:
    """Predicted plant kW/ton, ``None`` whenever no model applies."""

    predicted_efficiency: float | None
    total_predicted_power: float | None


def is_running_for_model(reading: ChillerReading, *, min_rla: float = MODEL_MIN_RLA) -> bool:
    """Loaded above ``min_rla`` with both water temperatures the model needs."""
    return reading.rla > min_rla and reading.evap_temp is not None and reading.cond_temp is not None


def running_chillers(
    snapshot: TimestepSnapshot,
    *,
    min_rla: float = MODEL_MIN_RLA,
) -> tuple[ChillerId, ...]:
    """Chillers that count as running for model selection."""
    return tuple(
        chiller_id
        for chiller_id, reading in snapshot.iter_chillers()
        if is_running_for_model(reading, min_rla=min_rla)
    )


def select_active_chiller_prediction(
    snapshot: TimestepSnapshot,
    *,
    min_rla: float = MODEL_MIN_RLA,
) -> ActiveChillerPrediction | None:
    """Predict plant power when exactly one chiller is running, otherwise ``None``."""
    running = running_chillers(snapshot, min_rla=min_rla)
    if len(running) != 1:
        return None

    chiller_id = running[0]
    reading = snapshot.chiller(chiller_id)
    assert reading.evap_temp is not None and reading.cond_temp is not None
    predicted = predict_chiller_power(
        chiller_id,
        reading.evap_temp,
        reading.cond_temp,
        snapshot.plant.cooling,
    )
    return ActiveChillerPrediction(chiller_id=chiller_id, predicted_power=predicted)


def get_physics_predictions(
    snapshot: TimestepSnapshot,
    has_control_decision: bool = False,
) -> Mapping[ChillerId, float | None]:
    """Predicted plant power keyed by chiller; only the single running chiller gets a value."""
    predictions: dict[ChillerId, float | None] = {chiller_id: None for chiller_id in ChillerId}
    if not has_control_decision:
        return predictions

    active = select_active_chiller_prediction(snapshot)
    if active is not None:
        predictions[active.chiller_id] = active.predicted_power
    return predictions


def get_predicted_efficiency(
    snapshot: TimestepSnapshot,
    has_control_decision: bool = False,
) -> PredictedEfficiency:
    if not has_control_decision or snapshot.plant.cooling <= 0:
        return PredictedEfficiency(predicted_efficiency=None, total_predicted_power=None)

    active = select_active_chiller_prediction(snapshot)
    if active is None:
        return PredictedEfficiency(predicted_efficiency=None, total_predicted_power=None)
    return PredictedEfficiency(
        predicted_efficiency=active.predicted_power / snapshot.plant.cooling,
        total_predicted_power=active.predicted_power,
    )


def get_efficiency(snapshot: TimestepSnapshot) -> float:
    """Actual plant kW/ton."""
    return snapshot.plant.efficiency
