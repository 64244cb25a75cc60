"""Threshold policy and result contracts for plant validation."""

from __future__ import annotations

from dataclasses import dataclass

from thermotrace.domain.models import ChillerId


@dataclass(frozen=True, slots=True)
class ValidationThresholds:
    """Physical limits and model-disagreement tolerance."""

    rla_max: float = 95.0
    rla_min: float = 30.0
    evap_temp_min: float = 42.0
    evap_temp_max: float = 55.0
    model_min_rla: float = 10.0
    efficiency_tolerance_percent: float = 10.0
    evap_checked_chillers: tuple[ChillerId, ...] = (ChillerId.ONE, ChillerId.TWO, ChillerId.THREE)

    def __post_init__(self) -> None:
        if self.rla_min < 0.0 or self.rla_min > self.rla_max:
            raise ValueError("rla_min must be in [0, rla_max]")
        if self.evap_temp_min > self.evap_temp_max:
            raise ValueError("evap_temp_min cannot be greater than evap_temp_max")
        if self.model_min_rla < 0.0:
            raise ValueError("model_min_rla must be >= 0")
        if self.efficiency_tolerance_percent <= 0.0:
            raise ValueError("efficiency_tolerance_percent must be > 0")
        if len(set(self.evap_checked_chillers)) != len(self.evap_checked_chillers):
            raise ValueError("evap_checked_chillers must not contain duplicates")


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Hard violations and advisory anomalies for one snapshot."""

    violations: tuple[str, ...] = ()
    anomalies: tuple[str, ...] = ()

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def has_anomalies(self) -> bool:
        return bool(self.anomalies)

    @property
    def is_clean(self) -> bool:
        return not self.violations and not self.anomalies
