"""CLI for inspecting control decisions and validation results in a run fixture."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import math
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Sequence

from thermotrace.data import Dataset, dataset_length, load_dataset, resolve_dataset_path
from thermotrace.evaluation import evaluate_model_fit
from thermotrace.reporting import ReportConfig, build_timestep_report, report_to_jsonable, scan_decisions


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InspectionOutcome:
    """Payload and summary counters from one CLI execution."""

    payload: dict[str, Any]
    timesteps: int
    violation_count: int
    anomaly_count: int


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser for fixture inspection."""
    parser = argparse.ArgumentParser(
        prog="thermotrace-inspect",
        description="Report control decisions, violations, and physics-model anomalies for a chiller-plant run.",
    )
    parser.add_argument(
        "--dataset",
        type=Path,
        default=None,
        help="Run fixture JSON. Defaults to $THERMOTRACE_DATASET or data/run-2025-10-01.json.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--index", type=int, default=None, help="Report one timestep.")
    mode.add_argument("--scan", action="store_true", help="List every timestep with a control decision.")
    mode.add_argument("--fit", action="store_true", help="Score the chiller power models on the fixture.")
    parser.add_argument("--history-window", type=int, default=24, help="Timesteps of efficiency history.")
    parser.add_argument("--forecast-window", type=int, default=8, help="Timesteps of upcoming cooling load.")
    parser.add_argument("--output", type=Path, default=None, help="Write the JSON payload to this path.")
    parser.add_argument(
        "--fail-on-violation",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Exit 1 when any reported timestep has a hard violation.",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )
    return parser


def run_from_args(args: argparse.Namespace) -> InspectionOutcome:
    """Load the fixture and assemble the requested payload."""
    dataset_path = resolve_dataset_path(args.dataset)
    dataset = asyncio.run(load_dataset(dataset_path))
    if not dataset:
        raise ValueError(f"no timestep records available from {dataset_path}")

    timesteps = dataset_length(dataset)
    if args.fit:
        return _fit_outcome(dataset, timesteps)
    if args.scan:
        return _scan_outcome(dataset, timesteps)

    index = timesteps - 1 if args.index is None else args.index
    config = ReportConfig(history_window=args.history_window, forecast_window=args.forecast_window)
    report = build_timestep_report(index, dataset, config=config)
    return InspectionOutcome(
        payload=report_to_jsonable(report),
        timesteps=timesteps,
        violation_count=len(report.validation.violations),
        anomaly_count=len(report.validation.anomalies),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        outcome = run_from_args(args)
    except Exception as exc:
        print(f"[ERROR] inspection failed: {exc}", file=sys.stderr)
        return 2

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        _write_json(args.output, outcome.payload)
        print(f"output: {args.output}")
    else:
        print(json.dumps(outcome.payload, indent=2, sort_keys=True, ensure_ascii=False))

    print(f"timesteps: {outcome.timesteps}")
    print(f"violations: {outcome.violation_count}")
    print(f"anomalies: {outcome.anomaly_count}")
    if args.fail_on_violation and outcome.violation_count > 0:
        print("[ERROR] Violations found and --fail-on-violation is set.", file=sys.stderr)
        return 1
    return 0


def _scan_outcome(dataset: Dataset, timesteps: int) -> InspectionOutcome:
    events = scan_decisions(dataset)
    logger.info("Found %d control decisions across %d timesteps", len(events), timesteps)
    return InspectionOutcome(
        payload={"decisions": [asdict(event) for event in events]},
        timesteps=timesteps,
        violation_count=sum(event.violation_count for event in events),
        anomaly_count=sum(event.anomaly_count for event in events),
    )


def _fit_outcome(dataset: Dataset, timesteps: int) -> InspectionOutcome:
    reports = evaluate_model_fit(dataset)
    payload = {
        "models": {
            chiller_id.label: {
                "samples": report.samples,
                "mae": _finite_or_none(report.mae),
                "rmse": _finite_or_none(report.rmse),
                "reported_rmse": report.reported_rmse,
                "deviation_count": report.deviation_count,
                "within_reported_fit": report.within_reported_fit,
            }
            for chiller_id, report in reports.items()
        }
    }
    return InspectionOutcome(payload=payload, timesteps=timesteps, violation_count=0, anomaly_count=0)


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False), encoding="utf-8")


if __name__ == "__main__":
    raise SystemExit(main())
