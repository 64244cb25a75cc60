"""Domain models for chiller-plant telemetry."""

from thermotrace.domain.models import (
    ChillerId,
    ChillerReading,
    EnvironmentReading,
    PlantReading,
    StagingState,
    TimestepSnapshot,
)

__all__ = [
    "ChillerId",
    "ChillerReading",
    "EnvironmentReading",
    "PlantReading",
    "StagingState",
    "TimestepSnapshot",
]
