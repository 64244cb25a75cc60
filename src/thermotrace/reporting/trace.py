"""Per-timestep decision trace payloads for the dashboard."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from thermotrace.data.contracts import Dataset
from thermotrace.data.parser import dataset_length, parse_timestep
from thermotrace.decisions.detector import ControlDecision, detect_control_decision
from thermotrace.domain.models import ChillerId, TimestepSnapshot
from thermotrace.physics.selection import PredictedEfficiency, get_physics_predictions, get_predicted_efficiency
from thermotrace.safety.checker import ViolationChecker
from thermotrace.safety.contracts import ValidationResult, ValidationThresholds


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Knobs for report assembly."""

    history_window: int = 24
    forecast_window: int = 8
    thresholds: ValidationThresholds = field(default_factory=ValidationThresholds)

    def __post_init__(self) -> None:
        if self.history_window <= 0:
            raise ValueError("history_window must be > 0")
        if self.forecast_window < 0:
            raise ValueError("forecast_window must be >= 0")


@dataclass(frozen=True, slots=True)
class HistoryPoint:
    timestep: int
    cooling: float
    efficiency: float


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    """Cooling load recorded for a timestep after the reported one."""

    timestep: int
    cooling: float


@dataclass(frozen=True, slots=True)
class TimestepReport:
    """Everything the dashboard shows for one timestep."""

    index: int
    snapshot: TimestepSnapshot
    decision: ControlDecision
    validation: ValidationResult
    actual_efficiency: float
    predicted: PredictedEfficiency
    physics_predictions: Mapping[ChillerId, float | None]
    history: tuple[HistoryPoint, ...]
    forecast: tuple[ForecastPoint, ...] = ()


@dataclass(frozen=True, slots=True)
class DecisionEvent:
    """Timeline entry for a timestep where a control action occurred."""

    index: int
    timestamp: str
    violation_count: int
    anomaly_count: int
    reasoning: str


def build_timestep_report(index: int, dataset: Dataset, *, config: ReportConfig | None = None) -> TimestepReport:
    resolved = ReportConfig() if config is None else config
    snapshot = parse_timestep(index, dataset)
    decision = detect_control_decision(index, dataset)
    validation = ViolationChecker(resolved.thresholds).evaluate(snapshot, decision.has_changes)
    return TimestepReport(
        index=index,
        snapshot=snapshot,
        decision=decision,
        validation=validation,
        actual_efficiency=snapshot.plant.efficiency,
        predicted=get_predicted_efficiency(snapshot, decision.has_changes),
        physics_predictions=get_physics_predictions(snapshot, decision.has_changes),
        history=_history(index, dataset, window=resolved.history_window),
        forecast=_forecast(index, dataset, window=resolved.forecast_window),
    )


def scan_decisions(dataset: Dataset, *, thresholds: ValidationThresholds | None = None) -> tuple[DecisionEvent, ...]:
    """Every timestep carrying a control decision, in order."""
    checker = ViolationChecker(thresholds)
    events: list[DecisionEvent] = []
    for index in range(dataset_length(dataset)):
        decision = detect_control_decision(index, dataset)
        if not decision.has_changes:
            continue
        snapshot = parse_timestep(index, dataset)
        validation = checker.evaluate(snapshot, has_control_decision=True)
        events.append(
            DecisionEvent(
                index=index,
                timestamp=snapshot.timestamp,
                violation_count=len(validation.violations),
                anomaly_count=len(validation.anomalies),
                reasoning=decision.reasoning,
            )
        )
    return tuple(events)


def report_to_jsonable(report: TimestepReport) -> dict[str, Any]:
    """Serialize a report into the dashboard's JSON shape."""
    snapshot = report.snapshot
    predicted_power = report.predicted.total_predicted_power
    return {
        "index": report.index,
        "timestep_data": {
            "datetime": snapshot.timestamp,
            "plant": {
                "cooling": snapshot.plant.cooling,
                "power": snapshot.plant.power,
                "supplyTemp": snapshot.plant.supply_temp,
            },
            **{
                _chiller_key(chiller_id): {
                    "rla": reading.rla,
                    "power": reading.power,
                    "evapTemp": reading.evap_temp,
                    "condTemp": reading.cond_temp,
                    "setpoint": reading.setpoint,
                }
                for chiller_id, reading in snapshot.iter_chillers()
            },
            "environment": asdict(snapshot.environment),
        },
        "control_decision": {
            "hasChanges": report.decision.has_changes,
            "reasoning": report.decision.reasoning,
            "staging": {
                _chiller_key(chiller_id): {
                    "previous": transition.previous.value,
                    "current": transition.current.value,
                }
                for chiller_id, transition in report.decision.staging.items()
            },
            "setpoints": {
                _chiller_key(chiller_id): {"previous": transition.previous, "current": transition.current}
                for chiller_id, transition in report.decision.setpoints.items()
            },
        },
        "efficiency": {
            "actual": report.actual_efficiency,
            "predicted": report.predicted.predicted_efficiency,
        },
        "physics_predictions": {
            **{_chiller_key(chiller_id): value for chiller_id, value in report.physics_predictions.items()},
            "totalPredictedPower": predicted_power,
        },
        "validation": {
            "violations": list(report.validation.violations),
            "anomalies": list(report.validation.anomalies),
        },
        "historical_chart_data": [asdict(point) for point in report.history],
        "forecast_data": [asdict(point) for point in report.forecast],
    }


def _history(index: int, dataset: Dataset, *, window: int) -> tuple[HistoryPoint, ...]:
    points: list[HistoryPoint] = []
    for step in range(max(0, index - window + 1), index + 1):
        snapshot = parse_timestep(step, dataset)
        points.append(
            HistoryPoint(timestep=step, cooling=snapshot.plant.cooling, efficiency=snapshot.plant.efficiency)
        )
    return tuple(points)


def _forecast(index: int, dataset: Dataset, *, window: int) -> tuple[ForecastPoint, ...]:
    last = min(index + window, dataset_length(dataset) - 1)
    return tuple(
        ForecastPoint(timestep=step, cooling=parse_timestep(step, dataset).plant.cooling)
        for step in range(index + 1, last + 1)
    )


def _chiller_key(chiller_id: ChillerId) -> str:
    return f"chiller{int(chiller_id)}"
