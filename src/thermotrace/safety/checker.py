"""Threshold violations and physics-model efficiency anomalies."""

from __future__ import annotations

import logging

from thermotrace.domain.models import TimestepSnapshot
from thermotrace.physics.selection import select_active_chiller_prediction
from thermotrace.safety.contracts import ValidationResult, ValidationThresholds


logger = logging.getLogger(__name__)

# Percent differences are compared at this many decimals so float noise does
# not push an exact-threshold deviation over the limit.
_PERCENT_PRECISION = 9


class ViolationChecker:
    """Validate snapshots against fixed physical limits and the power models."""

    def __init__(self, thresholds: ValidationThresholds | None = None) -> None:
        self._thresholds = ValidationThresholds() if thresholds is None else thresholds

    @property
    def thresholds(self) -> ValidationThresholds:
        return self._thresholds

    def evaluate(self, snapshot: TimestepSnapshot, has_control_decision: bool = False) -> ValidationResult:
        violations = self._check_limits(snapshot)
        anomalies: list[str] = []
        if has_control_decision and snapshot.plant.cooling > 0:
            anomaly = self._check_efficiency(snapshot)
            if anomaly is not None:
                anomalies.append(anomaly)

        if violations or anomalies:
            logger.debug(
                "Timestep %s: %d violation(s), %d anomaly(ies)",
                snapshot.timestamp,
                len(violations),
                len(anomalies),
            )
        return ValidationResult(violations=tuple(violations), anomalies=tuple(anomalies))

    def _check_limits(self, snapshot: TimestepSnapshot) -> list[str]:
        limits = self._thresholds
        violations: list[str] = []

        for chiller_id, reading in snapshot.iter_chillers():
            if reading.rla > limits.rla_max:
                violations.append(
                    f"{chiller_id.label} RLA exceeds safe limit ({reading.rla:.1f}% > {limits.rla_max:g}%)"
                )

        for chiller_id, reading in snapshot.iter_chillers():
            if 0 < reading.rla < limits.rla_min:
                violations.append(
                    f"{chiller_id.label} RLA below efficient range ({reading.rla:.1f}% < {limits.rla_min:g}%)"
                )

        for chiller_id in limits.evap_checked_chillers:
            evap_temp = snapshot.chiller(chiller_id).evap_temp
            if evap_temp is None:
                continue
            if evap_temp < limits.evap_temp_min:
                violations.append(
                    f"{chiller_id.label} evap temp too cold ({evap_temp:.1f}°F < {limits.evap_temp_min:g}°F)"
                )
            if evap_temp > limits.evap_temp_max:
                violations.append(
                    f"{chiller_id.label} evap temp too warm ({evap_temp:.1f}°F > {limits.evap_temp_max:g}°F)"
                )

        return violations

    def _check_efficiency(self, snapshot: TimestepSnapshot) -> str | None:
        plant_power = snapshot.plant.power
        if plant_power is None:
            return None
        active = select_active_chiller_prediction(snapshot, min_rla=self._thresholds.model_min_rla)
        if active is None or active.predicted_power == 0:
            return None

        cooling = snapshot.plant.cooling
        predicted_efficiency = active.predicted_power / cooling
        actual_efficiency = plant_power / cooling
        difference = actual_efficiency - predicted_efficiency
        difference_percent = difference / predicted_efficiency * 100.0
        magnitude = round(abs(difference_percent), _PERCENT_PRECISION)
        if magnitude <= self._thresholds.efficiency_tolerance_percent:
            return None

        direction = "worse" if difference > 0 else "better"
        return (
            f"Plant efficiency {direction} than physics model predicts "
            f"(actual: {actual_efficiency:.2f} kW/ton vs predicted: {predicted_efficiency:.2f} kW/ton, "
            f"{magnitude:.1f}% {direction})"
        )


def check_violations(
    snapshot: TimestepSnapshot,
    has_control_decision: bool = False,
    thresholds: ValidationThresholds | None = None,
) -> ValidationResult:
    """Hard limits always; efficiency anomalies only on decision timesteps."""
    return ViolationChecker(thresholds).evaluate(snapshot, has_control_decision)
