"""
Sweep and workflow orchestration.
"""

from openrank_racing.pipeline.sweep import (
    CancellationToken,
    SweepResult,
    sweep_months,
)
from openrank_racing.pipeline.workflow import RacingBarWorkflow

__all__ = [
    "CancellationToken",
    "SweepResult",
    "sweep_months",
    "RacingBarWorkflow",
]
