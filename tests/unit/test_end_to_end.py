"""Startup of a single chiller traced through parsing, detection, and checking."""

from __future__ import annotations

import pytest

from thermotrace.data.parser import parse_timestep
from thermotrace.decisions.detector import detect_control_decision
from thermotrace.domain.models import ChillerId, StagingState
from thermotrace.physics.regression import predict_chiller1_power
from thermotrace.physics.selection import get_predicted_efficiency
from thermotrace.safety.checker import check_violations


def _record(*, ch1_rla: float, ch1_evap: float | None, cooling: float, plant_power: float) -> dict[str, object]:
    record: dict[str, object] = {
        "datetime": "2025-10-01 06:00:00",
        "plant_cooling_rate": cooling,
        "plant_power": plant_power,
        "chilled_water_loop_supply_water_temperature": 45.0,
        "outdoor_weather_station_drybulb_temperature": 78.0,
        "outdoor_weather_station_humidity": 60.0,
        "outdoor_weather_station_wetbulb_temperature": 67.0,
    }
    for n in (1, 2, 3):
        record[f"chiller_{n}_cond_entering_water_temperature"] = 85.0
        record[f"chiller_{n}_evap_leaving_water_temperature"] = ch1_evap if n == 1 else None
        record[f"chiller_{n}_percentage_rla"] = ch1_rla if n == 1 else 0.0
        record[f"chiller_{n}_power"] = 0.0
        record[f"chiller_{n}_evap_leaving_water_set_temp"] = 44.0
    return record


def test_single_chiller_startup_is_clean() -> None:
    predicted = predict_chiller1_power(48.0, 85.0, 400.0)
    dataset = {
        "0": _record(ch1_rla=0.0, ch1_evap=None, cooling=0.0, plant_power=6.0),
        "1": _record(ch1_rla=40.0, ch1_evap=48.0, cooling=400.0, plant_power=predicted),
    }

    decision = detect_control_decision(1, dataset)
    snapshot = parse_timestep(1, dataset)
    result = check_violations(snapshot, decision.has_changes)

    assert decision.has_changes is True
    assert decision.staging[ChillerId.ONE].previous is StagingState.OFF
    assert decision.staging[ChillerId.ONE].current is StagingState.ON
    assert get_predicted_efficiency(snapshot, decision.has_changes).predicted_efficiency == pytest.approx(
        predicted / 400.0
    )
    assert result.violations == ()
    assert result.anomalies == ()
