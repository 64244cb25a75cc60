"""Replay a run fixture against the chiller power models."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from thermotrace.data.contracts import Dataset
from thermotrace.data.parser import dataset_length, parse_timestep
from thermotrace.decisions.detector import detect_control_decision
from thermotrace.domain.models import ChillerId
from thermotrace.evaluation.metrics import mean_absolute_error, root_mean_square_error
from thermotrace.physics.regression import CHILLER_MODELS, check_power_deviation
from thermotrace.physics.selection import select_active_chiller_prediction


@dataclass(frozen=True, slots=True)
class ModelFitReport:
    """Observed error of one chiller model over single-chiller timesteps."""

    chiller_id: ChillerId
    samples: int
    mae: float
    rmse: float
    reported_rmse: float
    deviation_count: int

    @property
    def deviation_fraction(self) -> float:
        return 0.0 if self.samples == 0 else self.deviation_count / self.samples

    @property
    def within_reported_fit(self) -> bool:
        """Observed RMSE stays inside the 2x RMSE band of the published fit."""
        return self.samples > 0 and self.rmse <= 2.0 * self.reported_rmse


def evaluate_model_fit(dataset: Dataset, *, decision_timesteps_only: bool = False) -> dict[ChillerId, ModelFitReport]:
    """Score each model on the timesteps where its chiller ran alone."""
    pairs: dict[ChillerId, list[tuple[float, float]]] = {chiller_id: [] for chiller_id in ChillerId}

    for index in range(dataset_length(dataset)):
        snapshot = parse_timestep(index, dataset)
        if snapshot.plant.cooling <= 0 or snapshot.plant.power is None:
            continue
        if decision_timesteps_only and not detect_control_decision(index, dataset).has_changes:
            continue
        active = select_active_chiller_prediction(snapshot)
        if active is None:
            continue
        pairs[active.chiller_id].append((active.predicted_power, snapshot.plant.power))

    reports: dict[ChillerId, ModelFitReport] = {}
    for chiller_id, rows in pairs.items():
        model = CHILLER_MODELS[chiller_id]
        if not rows:
            reports[chiller_id] = ModelFitReport(
                chiller_id=chiller_id,
                samples=0,
                mae=float("nan"),
                rmse=float("nan"),
                reported_rmse=model.rmse,
                deviation_count=0,
            )
            continue
        predicted = np.asarray([row[0] for row in rows], dtype=np.float64)
        actual = np.asarray([row[1] for row in rows], dtype=np.float64)
        deviation_count = sum(
            1 for pred, obs in rows if check_power_deviation(obs, pred, model.rmse).is_deviation
        )
        reports[chiller_id] = ModelFitReport(
            chiller_id=chiller_id,
            samples=len(rows),
            mae=mean_absolute_error(predicted, actual),
            rmse=root_mean_square_error(predicted, actual),
            reported_rmse=model.rmse,
            deviation_count=deviation_count,
        )
    return reports
