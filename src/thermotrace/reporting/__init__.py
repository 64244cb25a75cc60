"""Timestep report assembly and decision timelines."""

from thermotrace.reporting.trace import (
    DecisionEvent,
    ForecastPoint,
    HistoryPoint,
    ReportConfig,
    TimestepReport,
    build_timestep_report,
    report_to_jsonable,
    scan_decisions,
)

__all__ = [
    "DecisionEvent",
    "ForecastPoint",
    "HistoryPoint",
    "ReportConfig",
    "TimestepReport",
    "build_timestep_report",
    "report_to_jsonable",
    "scan_decisions",
]
