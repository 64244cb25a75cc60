"""Control-decision detection between adjacent timesteps."""

from thermotrace.decisions.detector import (
    ControlDecision,
    SetpointTransition,
    StagingTransition,
    detect_control_decision,
    diff_snapshots,
)

__all__ = [
    "ControlDecision",
    "SetpointTransition",
    "StagingTransition",
    "detect_control_decision",
    "diff_snapshots",
]
