"""Tests for the fixture inspection CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from thermotrace.cli import inspector
from thermotrace.data.loader import clear_loader_cache


def _record(*, rla: float, cooling: float, plant_power: float) -> str:
    fields = {
        "datetime": "2025-10-01 13:00:00",
        "plant_cooling_rate": cooling,
        "plant_power": plant_power,
        "chilled_water_loop_supply_water_temperature": 44.0,
        "outdoor_weather_station_drybulb_temperature": 86.0,
        "outdoor_weather_station_humidity": 44.0,
        "outdoor_weather_station_wetbulb_temperature": 69.0,
    }
    for n in (1, 2, 3):
        fields[f"chiller_{n}_cond_entering_water_temperature"] = 85.0
        fields[f"chiller_{n}_percentage_rla"] = rla if n == 1 else 0.0
        fields[f"chiller_{n}_power"] = 0.0
        fields[f"chiller_{n}_evap_leaving_water_set_temp"] = 44.0
    body = json.dumps(fields)[:-1]
    # Idle chillers carry raw NaN literals, as exported fixtures do.
    return body + ', "chiller_1_evap_leaving_water_temperature": 48.0' + "".join(
        f', "chiller_{n}_evap_leaving_water_temperature": NaN' for n in (2, 3)
    ) + "}"


def _write_fixture(tmp_path: Path, *, second_rla: float = 40.0) -> Path:
    path = tmp_path / "run.json"
    path.write_text(
        "{"
        f'"0": {_record(rla=0.0, cooling=0.0, plant_power=4.0)}, '
        f'"1": {_record(rla=second_rla, cooling=400.0, plant_power=321.0)}'
        "}",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _fresh_loaders():
    clear_loader_cache()
    yield
    clear_loader_cache()


def test_index_report_printed_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = inspector.main(["--dataset", str(_write_fixture(tmp_path)), "--index", "1"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert '"hasChanges": true' in captured.out
    assert '"forecast_data": []' in captured.out
    assert "timesteps: 2" in captured.out
    assert "violations: 0" in captured.out


def test_scan_written_to_output_file(tmp_path: Path) -> None:
    output = tmp_path / "out" / "decisions.json"

    exit_code = inspector.main(["--dataset", str(_write_fixture(tmp_path)), "--scan", "--output", str(output)])

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert exit_code == 0
    assert [event["index"] for event in payload["decisions"]] == [1]


def test_fit_mode_reports_each_model(tmp_path: Path) -> None:
    output = tmp_path / "fit.json"

    exit_code = inspector.main(["--dataset", str(_write_fixture(tmp_path)), "--fit", "--output", str(output)])

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert exit_code == 0
    assert payload["models"]["CH1"]["samples"] == 1
    assert payload["models"]["CH2"]["mae"] is None


def test_fail_on_violation_sets_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_fixture(tmp_path, second_rla=97.0)

    exit_code = inspector.main(["--dataset", str(path), "--fail-on-violation"])

    assert exit_code == 1
    assert "--fail-on-violation" in capsys.readouterr().err


def test_missing_dataset_returns_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = inspector.main(["--dataset", str(tmp_path / "missing.json")])

    assert exit_code == 2
    assert "[ERROR] inspection failed" in capsys.readouterr().err


def test_dataset_path_taken_from_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("THERMOTRACE_DATASET", str(_write_fixture(tmp_path)))

    exit_code = inspector.main([])

    assert exit_code == 0
    assert "timesteps: 2" in capsys.readouterr().out
