"""
Report Domain Models

Dataclasses for ledger events, report summaries and simulation results.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class DataPoint:
    """
    One row of the broker ledger (a trade or a balance operation).

    Instances are never mutated; derived sequences (e.g. resimulated
    events) are built with dataclasses.replace.

    Attributes:
        time: Time text exactly as printed in the report.
        timestamp: Parsed time, used for ordering.
        balance_after: Account balance after this event.
        net_profit: raw_profit + swap + commission.
        volume: Position size; 0 for deposits/withdrawals/adjustments.
        kind: Lower-cased type cell ("buy", "sell", "balance", ...).
        swap: Swap component of net_profit.
        commission: Commission component of net_profit.
        raw_profit: Profit column value before swap and commission.
    """
    time: str
    timestamp: datetime
    balance_after: float
    net_profit: float
    volume: float
    kind: Optional[str] = None
    swap: Optional[float] = None
    commission: Optional[float] = None
    raw_profit: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "time": self.time,
            "timestamp": self.timestamp.isoformat(),
            "balance_after": self.balance_after,
            "net_profit": self.net_profit,
            "volume": self.volume,
            "kind": self.kind,
            "swap": self.swap,
            "commission": self.commission,
            "raw_profit": self.raw_profit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DataPoint":
        """Create DataPoint from dictionary."""
        return cls(
            time=data["time"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            balance_after=data.get("balance_after", 0.0),
            net_profit=data.get("net_profit", 0.0),
            volume=data.get("volume", 0.0),
            kind=data.get("kind"),
            swap=data.get("swap"),
            commission=data.get("commission"),
            raw_profit=data.get("raw_profit"),
        )


@dataclass
class ReportMeta:
    """
    Summary metrics of a report, display-ready.

    Values keep the report's own notation ("123.45", "12 (34.00%)").
    Built once by the parser from broker text, or from scratch by the
    statistics engine for a recomputed sequence. The two need not agree:
    the engine cannot derive direction or equity based fields.

    Unrecognised summary rows are kept in ``extra`` (label -> value).
    """
    total_net_profit: Optional[str] = None
    gross_profit: Optional[str] = None
    gross_loss: Optional[str] = None
    profit_factor: Optional[str] = None
    sharpe_ratio: Optional[str] = None

    balance_dd_max: Optional[str] = None
    equity_dd_max: Optional[str] = None
    balance_dd_rel: Optional[str] = None
    equity_dd_rel: Optional[str] = None

    total_trades: int = 0
    short_trades: Optional[str] = None
    long_trades: Optional[str] = None
    profit_trades: Optional[str] = None
    loss_trades: Optional[str] = None

    largest_profit: Optional[str] = None
    largest_loss: Optional[str] = None
    avg_profit: Optional[str] = None
    avg_loss: Optional[str] = None

    max_consec_wins_money: Optional[str] = None
    max_consec_losses_money: Optional[str] = None
    max_consec_profit_count: Optional[str] = None
    max_consec_loss_count: Optional[str] = None
    avg_consec_wins: Optional[str] = None
    avg_consec_losses: Optional[str] = None

    fixed_lot_size: Optional[float] = None
    period: Optional[str] = None
    extra: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["extra"] = dict(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ReportMeta":
        """Create ReportMeta from dictionary.

        Keys that are not ReportMeta fields land in ``extra``.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = dict(data.get("extra") or {})
        for key, value in data.items():
            if key not in known:
                extra[key] = value
        return cls(extra=extra, **kwargs)


@dataclass
class ParsedReport:
    """Result of parsing one strategy tester report."""
    events: list[DataPoint] = field(default_factory=list)
    initial_deposit: float = 0.0
    meta: ReportMeta = field(default_factory=ReportMeta)

    @property
    def fixed_lot_size(self) -> Optional[float]:
        """Common volume of every trade, or None when lots varied."""
        return self.meta.fixed_lot_size

    def to_dict(self) -> dict:
        return {
            "events": [e.to_dict() for e in self.events],
            "initial_deposit": self.initial_deposit,
            "meta": self.meta.to_dict(),
        }


@dataclass(frozen=True)
class Comparison:
    """Original vs simulated net profit."""
    original: float = 0.0
    simulated: float = 0.0
    diff: float = 0.0
    diff_percent: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "original": self.original,
            "simulated": self.simulated,
            "diff": self.diff,
            "diff_percent": self.diff_percent,
        }


class SimulationStatus(Enum):
    """Outcome of a resimulation request."""
    OK = "ok"
    NO_DATA = "no_data"
    # Lots varied across trades (or lot size invalid): rescaling is not sound
    UNAVAILABLE = "unavailable"


@dataclass
class SimulationResult:
    """
    Result of resimulating a report at a counterfactual lot size.

    Attributes:
        status: OK, NO_DATA or UNAVAILABLE.
        lot_size: Lot size the events were rescaled to.
        events: Simulated events (new copies, original untouched).
        meta: Statistics recomputed from the simulated events.
        comparison: Original vs simulated net profit.
        error: Explanation when status is not OK.
    """
    status: SimulationStatus
    lot_size: float = 0.0
    events: list[DataPoint] = field(default_factory=list)
    meta: ReportMeta = field(default_factory=ReportMeta)
    comparison: Comparison = field(default_factory=Comparison)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is SimulationStatus.OK

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "lot_size": self.lot_size,
            "events": [e.to_dict() for e in self.events],
            "meta": self.meta.to_dict(),
            "comparison": self.comparison.to_dict(),
            "error": self.error,
        }
