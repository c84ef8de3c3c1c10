"""
Tester Report - Core Domain Models

This package contains pure domain models:
- models: DataPoint, ReportMeta, ParsedReport and simulation results
- state: SimulationState kept by the UI between calls
"""

from report_sim.core.models import (
    DataPoint,
    ReportMeta,
    ParsedReport,
    Comparison,
    SimulationStatus,
    SimulationResult,
)
from report_sim.core.state import SimulationState

__all__ = [
    # models
    "DataPoint",
    "ReportMeta",
    "ParsedReport",
    "Comparison",
    "SimulationStatus",
    "SimulationResult",
    # state
    "SimulationState",
]
