"""Raw fixture record contract: field names of one flat timestep record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from thermotrace.domain.models import ChillerId


Record = Mapping[str, Any]
Dataset = Mapping[str, Record]

DATETIME_FIELD = "datetime"
PLANT_COOLING_FIELD = "plant_cooling_rate"
PLANT_POWER_FIELD = "plant_power"
SUPPLY_TEMP_FIELD = "chilled_water_loop_supply_water_temperature"
DRYBULB_FIELD = "outdoor_weather_station_drybulb_temperature"
HUMIDITY_FIELD = "outdoor_weather_station_humidity"
WETBULB_FIELD = "outdoor_weather_station_wetbulb_temperature"


@dataclass(frozen=True, slots=True)
class ChillerFieldNames:
    """Raw field names for one chiller."""

    cond_temp: str
    evap_temp: str
    rla: str
    power: str
    setpoint: str

    @classmethod
    def for_chiller(cls, chiller_id: ChillerId) -> ChillerFieldNames:
        prefix = f"chiller_{int(chiller_id)}"
        return cls(
            cond_temp=f"{prefix}_cond_entering_water_temperature",
            evap_temp=f"{prefix}_evap_leaving_water_temperature",
            rla=f"{prefix}_percentage_rla",
            power=f"{prefix}_power",
            setpoint=f"{prefix}_evap_leaving_water_set_temp",
        )


CHILLER_FIELDS: dict[ChillerId, ChillerFieldNames] = {
    chiller_id: ChillerFieldNames.for_chiller(chiller_id) for chiller_id in ChillerId
}


def required_fields() -> tuple[str, ...]:
    """Every field name a complete record carries."""
    fields: list[str] = [
        DATETIME_FIELD,
        PLANT_COOLING_FIELD,
        PLANT_POWER_FIELD,
        SUPPLY_TEMP_FIELD,
        DRYBULB_FIELD,
        HUMIDITY_FIELD,
        WETBULB_FIELD,
    ]
    for names in CHILLER_FIELDS.values():
        fields.extend((names.cond_temp, names.evap_temp, names.rla, names.power, names.setpoint))
    return tuple(fields)
