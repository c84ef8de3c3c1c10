"""
Simulation Session State

Shape of the state the surrounding UI keeps between resimulation calls
(last lot size, last result set). The core never reads it implicitly:
callers pass lot_size and initial_deposit explicitly.
"""

from dataclasses import dataclass, field
from typing import Optional

from report_sim.core.models import DataPoint, ReportMeta


@dataclass
class SimulationState:
    """
    In-memory session state for the simulation view.

    Attributes:
        events: Last simulated event sequence.
        meta: Statistics for ``events``.
        lot_size: Selected lot size (0 = not chosen yet).
        initial_deposit: Starting balance the events were simulated from.
    """
    events: list[DataPoint] = field(default_factory=list)
    meta: ReportMeta = field(default_factory=ReportMeta)
    lot_size: float = 0.0
    initial_deposit: float = 0.0

    def set_results(
        self,
        events: list[DataPoint],
        meta: ReportMeta,
        lot_size: float,
        initial_deposit: float,
    ) -> None:
        """Replace the stored result set."""
        self.events = list(events)
        self.meta = meta
        self.lot_size = lot_size
        self.initial_deposit = initial_deposit

    def set_lot_size(self, lot_size: float) -> None:
        self.lot_size = lot_size

    def clear(self) -> None:
        """Drop results, e.g. when a new report is uploaded."""
        self.events = []
        self.meta = ReportMeta()
        self.lot_size = 0.0
        self.initial_deposit = 0.0

    def effective_lot_size(self, fixed_lot_size: Optional[float]) -> Optional[float]:
        """Stored lot size, else the report's own fixed lot."""
        if self.lot_size > 0:
            return self.lot_size
        return fixed_lot_size

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "events": [e.to_dict() for e in self.events],
            "meta": self.meta.to_dict(),
            "lot_size": self.lot_size,
            "initial_deposit": self.initial_deposit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationState":
        """Create SimulationState from dictionary."""
        return cls(
            events=[DataPoint.from_dict(e) for e in data.get("events", [])],
            meta=ReportMeta.from_dict(data.get("meta", {})),
            lot_size=data.get("lot_size", 0.0),
            initial_deposit=data.get("initial_deposit", 0.0),
        )
