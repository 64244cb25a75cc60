"""Core domain models for chiller-plant telemetry snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from types import MappingProxyType
from typing import Mapping


class ChillerId(IntEnum):
    """Chillers of the plant, numbered as in the raw field names."""

    ONE = 1
    TWO = 2
    THREE = 3

    @property
    def label(self) -> str:
        """Short operator-facing name, e.g. ``CH1``."""
        return f"CH{self.value}"

    @property
    def rated_tons(self) -> int:
        """Nameplate cooling capacity."""
        return _RATED_TONS[self]


_RATED_TONS: dict[ChillerId, int] = {
    ChillerId.ONE: 500,
    ChillerId.TWO: 500,
    ChillerId.THREE: 375,
}


class StagingState(StrEnum):
    """Staging state of one chiller."""

    ON = "ON"
    OFF = "OFF"


@dataclass(frozen=True, slots=True)
class ChillerReading:
    """Per-chiller state at one timestep.

    Every temperature and ``power`` may be ``None`` when the sensor has no
    reading, which can happen even while the chiller is loaded. A missing RLA
    is stored as 0.0.
    """

    cond_temp: float | None
    evap_temp: float | None
    rla: float
    power: float | None
    setpoint: float | None

    @property
    def is_on(self) -> bool:
        """A chiller is staged on whenever it draws any load."""
        return self.rla > 0

    @property
    def staging_state(self) -> StagingState:
        return StagingState.ON if self.is_on else StagingState.OFF


@dataclass(frozen=True, slots=True)
class PlantReading:
    """Aggregate plant output and draw. A missing cooling rate is stored as 0.0."""

    cooling: float
    power: float | None
    supply_temp: float | None

    @property
    def efficiency(self) -> float:
        """Plant kW/ton, 0.0 when no cooling is delivered or power is unknown."""
        if self.power is None or self.cooling <= 0:
            return 0.0
        return self.power / self.cooling


@dataclass(frozen=True, slots=True)
class EnvironmentReading:
    """Outdoor weather-station conditions."""

    drybulb: float | None
    humidity: float | None
    wetbulb: float | None


@dataclass(frozen=True, slots=True)
class TimestepSnapshot:
    """Time-aligned plant state for one fixture timestep."""

    timestamp: str
    chillers: Mapping[ChillerId, ChillerReading]
    plant: PlantReading
    environment: EnvironmentReading
    index: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        missing = set(ChillerId) - set(self.chillers)
        if missing:
            labels = ", ".join(chiller.label for chiller in sorted(missing))
            raise ValueError(f"snapshot missing chiller readings: {labels}")
        object.__setattr__(self, "chillers", MappingProxyType(dict(self.chillers)))

    def chiller(self, chiller_id: ChillerId | int) -> ChillerReading:
        """Return one chiller reading by id."""
        return self.chillers[ChillerId(chiller_id)]

    def iter_chillers(self) -> tuple[tuple[ChillerId, ChillerReading], ...]:
        """Chiller readings in plant order."""
        return tuple((chiller_id, self.chillers[chiller_id]) for chiller_id in ChillerId)

    @property
    def chiller1(self) -> ChillerReading:
        return self.chillers[ChillerId.ONE]

    @property
    def chiller2(self) -> ChillerReading:
        return self.chillers[ChillerId.TWO]

    @property
    def chiller3(self) -> ChillerReading:
        return self.chillers[ChillerId.THREE]

    @property
    def active_chillers(self) -> tuple[ChillerId, ...]:
        """Chillers currently staged on."""
        return tuple(chiller_id for chiller_id, reading in self.iter_chillers() if reading.is_on)
