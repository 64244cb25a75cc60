"""Map flat fixture records into structured timestep snapshots."""

from __future__ import annotations

from typing import Any

from thermotrace.data.contracts import (
    CHILLER_FIELDS,
    DATETIME_FIELD,
    DRYBULB_FIELD,
    HUMIDITY_FIELD,
    PLANT_COOLING_FIELD,
    PLANT_POWER_FIELD,
    SUPPLY_TEMP_FIELD,
    WETBULB_FIELD,
    Dataset,
    Record,
)
from thermotrace.domain.models import (
    ChillerId,
    ChillerReading,
    EnvironmentReading,
    PlantReading,
    TimestepSnapshot,
)


def parse_timestep(index: int, dataset: Dataset) -> TimestepSnapshot:
    """Build the snapshot stored under ``str(index)``.

    No bounds checking: an unknown index raises ``KeyError``, as does a record
    missing any field. ``null`` values (``NaN`` in the raw fixture) become
    ``None``, except cooling rate and RLA which read as 0.0 so the plant and
    chiller count as unloaded.
    """
    record = dataset[str(index)]
    return TimestepSnapshot(
        timestamp=str(record[DATETIME_FIELD]),
        chillers={chiller_id: _parse_chiller(record, chiller_id) for chiller_id in ChillerId},
        plant=PlantReading(
            cooling=_float_or_zero(record[PLANT_COOLING_FIELD]),
            power=_optional_float(record[PLANT_POWER_FIELD]),
            supply_temp=_optional_float(record[SUPPLY_TEMP_FIELD]),
        ),
        environment=EnvironmentReading(
            drybulb=_optional_float(record[DRYBULB_FIELD]),
            humidity=_optional_float(record[HUMIDITY_FIELD]),
            wetbulb=_optional_float(record[WETBULB_FIELD]),
        ),
        index=index,
    )


def dataset_length(dataset: Dataset) -> int:
    """Number of contiguous timesteps starting at index 0."""
    count = 0
    while str(count) in dataset:
        count += 1
    return count


def _parse_chiller(record: Record, chiller_id: ChillerId) -> ChillerReading:
    names = CHILLER_FIELDS[chiller_id]
    return ChillerReading(
        cond_temp=_optional_float(record[names.cond_temp]),
        evap_temp=_optional_float(record[names.evap_temp]),
        rla=_float_or_zero(record[names.rla]),
        power=_optional_float(record[names.power]),
        setpoint=_optional_float(record[names.setpoint]),
    )


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def _float_or_zero(value: Any) -> float:
    return 0.0 if value is None else float(value)
