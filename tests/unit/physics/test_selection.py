"""Tests for single-active-chiller prediction gating."""

from __future__ import annotations

import pytest

from thermotrace.domain.models import (
    ChillerId,
    ChillerReading,
    EnvironmentReading,
    PlantReading,
    TimestepSnapshot,
)
from thermotrace.physics.regression import predict_chiller1_power, predict_chiller3_power
from thermotrace.physics.selection import (
    get_efficiency,
    get_physics_predictions,
    get_predicted_efficiency,
    is_running_for_model,
    running_chillers,
    select_active_chiller_prediction,
)


def _chiller(rla: float = 0.0, evap: float | None = None, cond: float | None = 85.0) -> ChillerReading:
    return ChillerReading(cond_temp=cond, evap_temp=evap, rla=rla, power=0.0, setpoint=44.0)


def _snapshot(
    *,
    ch1: ChillerReading | None = None,
    ch2: ChillerReading | None = None,
    ch3: ChillerReading | None = None,
    cooling: float = 400.0,
    power: float = 320.0,
) -> TimestepSnapshot:
    return TimestepSnapshot(
        timestamp="2025-10-01 12:00:00",
        chillers={
            ChillerId.ONE: ch1 or _chiller(),
            ChillerId.TWO: ch2 or _chiller(),
            ChillerId.THREE: ch3 or _chiller(),
        },
        plant=PlantReading(cooling=cooling, power=power, supply_temp=44.0),
        environment=EnvironmentReading(drybulb=82.0, humidity=48.0, wetbulb=67.0),
    )


def test_running_for_model_requires_load_above_ten_and_water_temps() -> None:
    assert is_running_for_model(_chiller(rla=10.0, evap=46.0)) is False
    assert is_running_for_model(_chiller(rla=10.5, evap=None)) is False
    assert is_running_for_model(_chiller(rla=10.5, evap=46.0)) is True
    assert is_running_for_model(_chiller(rla=50.0, evap=46.0, cond=None)) is False


def test_single_running_chiller_gets_prediction() -> None:
    snapshot = _snapshot(ch1=_chiller(rla=50.0, evap=48.0), ch2=_chiller(rla=5.0, evap=47.0))

    active = select_active_chiller_prediction(snapshot)

    assert running_chillers(snapshot) == (ChillerId.ONE,)
    assert active is not None
    assert active.chiller_id == ChillerId.ONE
    assert active.predicted_power == pytest.approx(predict_chiller1_power(48.0, 85.0, 400.0))
    assert active.model.rmse == 13.20


def test_chiller_three_prediction_uses_its_own_inputs() -> None:
    snapshot = _snapshot(ch3=_chiller(rla=70.0, evap=45.0, cond=78.0), cooling=250.0)

    active = select_active_chiller_prediction(snapshot)

    assert active is not None
    assert active.chiller_id == ChillerId.THREE
    assert active.predicted_power == pytest.approx(predict_chiller3_power(45.0, 78.0, 250.0))


@pytest.mark.parametrize(
    "snapshot",
    [
        _snapshot(),
        _snapshot(ch1=_chiller(rla=50.0, evap=48.0), ch2=_chiller(rla=50.0, evap=46.0)),
    ],
)
def test_no_prediction_outside_single_chiller_operation(snapshot: TimestepSnapshot) -> None:
    assert select_active_chiller_prediction(snapshot) is None
    assert get_predicted_efficiency(snapshot, True).predicted_efficiency is None
    assert all(value is None for value in get_physics_predictions(snapshot, True).values())


def test_physics_predictions_require_control_decision() -> None:
    snapshot = _snapshot(ch1=_chiller(rla=50.0, evap=48.0))

    without = get_physics_predictions(snapshot, False)
    with_decision = get_physics_predictions(snapshot, True)

    assert all(value is None for value in without.values())
    assert with_decision[ChillerId.ONE] == pytest.approx(predict_chiller1_power(48.0, 85.0, 400.0))
    assert with_decision[ChillerId.TWO] is None
    assert with_decision[ChillerId.THREE] is None


def test_predicted_efficiency_divides_by_cooling() -> None:
    snapshot = _snapshot(ch1=_chiller(rla=50.0, evap=48.0))
    expected_power = predict_chiller1_power(48.0, 85.0, 400.0)

    result = get_predicted_efficiency(snapshot, True)

    assert result.total_predicted_power == pytest.approx(expected_power)
    assert result.predicted_efficiency == pytest.approx(expected_power / 400.0)


def test_predicted_efficiency_skipped_without_cooling_or_decision() -> None:
    snapshot = _snapshot(ch1=_chiller(rla=50.0, evap=48.0), cooling=0.0)

    assert get_predicted_efficiency(snapshot, True).total_predicted_power is None
    assert get_predicted_efficiency(_snapshot(ch1=_chiller(rla=50.0, evap=48.0)), False).predicted_efficiency is None


def test_actual_efficiency() -> None:
    assert get_efficiency(_snapshot(cooling=400.0, power=320.0)) == pytest.approx(0.8)
    assert get_efficiency(_snapshot(cooling=0.0, power=20.0)) == 0.0
