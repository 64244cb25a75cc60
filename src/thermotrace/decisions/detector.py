"""Detect staging and setpoint actions between adjacent timesteps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from thermotrace.data.contracts import Dataset
from thermotrace.data.parser import parse_timestep
from thermotrace.domain.models import ChillerId, ChillerReading, StagingState, TimestepSnapshot


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StagingTransition:
    previous: StagingState
    current: StagingState

    @property
    def changed(self) -> bool:
        return self.previous != self.current


@dataclass(frozen=True, slots=True)
class SetpointTransition:
    """Evaporator leaving-water setpoint before and after the timestep."""

    previous: float | None
    current: float | None
    changed: bool = False


@dataclass(frozen=True, slots=True)
class ControlDecision:
    """Structured diff of two adjacent snapshots plus a generated rationale."""

    staging: Mapping[ChillerId, StagingTransition]
    setpoints: Mapping[ChillerId, SetpointTransition]
    has_changes: bool
    reasoning: str

    def staging_changes(self) -> tuple[ChillerId, ...]:
        return tuple(chiller_id for chiller_id in ChillerId if self.staging[chiller_id].changed)

    def setpoint_changes(self) -> tuple[ChillerId, ...]:
        return tuple(chiller_id for chiller_id in ChillerId if self.setpoints[chiller_id].changed)


def detect_control_decision(index: int, dataset: Dataset) -> ControlDecision:
    """Compare timestep ``index`` with ``index - 1``; index 0 compares with itself."""
    current = parse_timestep(index, dataset)
    previous = parse_timestep(index - 1, dataset) if index > 0 else current
    decision = diff_snapshots(previous, current)
    if decision.has_changes:
        logger.debug("Control decision at timestep %d: %s", index, decision.reasoning)
    return decision


def diff_snapshots(previous: TimestepSnapshot, current: TimestepSnapshot) -> ControlDecision:
    """Derive the control decision between two snapshots."""
    staging: dict[ChillerId, StagingTransition] = {}
    setpoints: dict[ChillerId, SetpointTransition] = {}
    for chiller_id in ChillerId:
        before = previous.chiller(chiller_id)
        after = current.chiller(chiller_id)
        staging[chiller_id] = StagingTransition(previous=before.staging_state, current=after.staging_state)
        setpoints[chiller_id] = SetpointTransition(
            previous=before.setpoint,
            current=after.setpoint,
            changed=_setpoint_changed(before, after),
        )

    has_changes = any(transition.changed for transition in staging.values()) or any(
        transition.changed for transition in setpoints.values()
    )
    return ControlDecision(
        staging=MappingProxyType(staging),
        setpoints=MappingProxyType(setpoints),
        has_changes=has_changes,
        reasoning=_build_reasoning(current, staging, setpoints),
    )


def _setpoint_changed(before: ChillerReading, after: ChillerReading) -> bool:
    # Setpoint drift on idle equipment is not an action. A missing previous
    # setpoint has nothing to compare against.
    if not after.is_on or before.setpoint is None:
        return False
    return after.setpoint != before.setpoint


def _build_reasoning(
    current: TimestepSnapshot,
    staging: Mapping[ChillerId, StagingTransition],
    setpoints: Mapping[ChillerId, SetpointTransition],
) -> str:
    reasoning = (
        f"Load at {current.plant.cooling:.0f} tons with "
        f"{_format_temperature(current.environment.drybulb)}°F outdoor temperature. "
    )

    staging_changes = [
        f"{chiller_id.label} {transition.previous} → {transition.current}"
        for chiller_id, transition in staging.items()
        if transition.changed
    ]
    if staging_changes:
        reasoning += f"Staging changes: {', '.join(staging_changes)}. "

    setpoint_changes = [
        (
            f"{chiller_id.label} evap {_format_temperature(transition.previous)}°F → "
            f"{_format_temperature(transition.current)}°F"
        )
        for chiller_id, transition in setpoints.items()
        if transition.changed
    ]
    if setpoint_changes:
        reasoning += f"Setpoint changes: {', '.join(setpoint_changes)}. "

    active = [
        f"{chiller_id.label} at {reading.rla:.1f}% RLA"
        for chiller_id, reading in current.iter_chillers()
        if reading.is_on
    ]
    if active:
        reasoning += f"Active: {', '.join(active)}."
    else:
        reasoning += "All chillers offline."
    return reasoning


def _format_temperature(value: float | None) -> str:
    return "--" if value is None else f"{value:.0f}"
