"""
Lot Size Resimulation Module

Replays a fixed-lot report at a different lot size. Each trade's
volume-proportional profit (raw profit and commission) is rescaled while
swap is kept as is, then the balance curve is rebuilt from the initial
deposit and fed back into the statistics engine.
"""

import logging
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

sys.path.insert(0, str(Path(__file__).parent.parent))
import settings

from report_sim.core.models import (
    Comparison,
    DataPoint,
    ParsedReport,
    ReportMeta,
    SimulationResult,
    SimulationStatus,
)
from report_sim.numbers import parse_plain_number
from report_sim.parser import detect_fixed_lot
from report_sim.statistics import compute_statistics

logger = logging.getLogger(__name__)


def _is_valid_lot(lot_size: Optional[float]) -> bool:
    return lot_size is not None and math.isfinite(lot_size) and lot_size > 0


def rescale_event(event: DataPoint, lot_size: float) -> DataPoint:
    """
    Copy of a trade event as if it had been opened at ``lot_size``.

    With a component breakdown: raw_profit * r + swap + commission * r,
    r = lot_size / volume. Without one: net_profit / volume * lot_size.
    Non-trade events are returned unchanged.
    """
    if event.volume <= 0:
        return event

    if event.raw_profit is None:
        return replace(
            event,
            volume=lot_size,
            net_profit=event.net_profit / event.volume * lot_size,
        )

    ratio = lot_size / event.volume
    raw_profit = event.raw_profit * ratio
    commission = (event.commission or 0.0) * ratio
    swap = event.swap or 0.0
    return replace(
        event,
        volume=lot_size,
        raw_profit=raw_profit,
        commission=commission,
        net_profit=raw_profit + swap + commission,
    )


def resimulate(
    events: Sequence[DataPoint],
    initial_deposit: float,
    lot_size: float,
) -> Optional[list[DataPoint]]:
    """
    Rebuild the event sequence at a counterfactual lot size.

    Args:
        events: Canonical events, chronological. Not modified.
        initial_deposit: Starting balance of the simulated curve.
        lot_size: Target lot size (positive).

    Returns:
        New events whose net_profit is the rescaled profit and whose
        balance_after accumulates those profits from initial_deposit.
        [] for empty input. None when resimulation is unavailable:
        trades used different lot sizes, or lot_size is not positive.
    """
    if not events:
        return []

    if not _is_valid_lot(lot_size):
        logger.debug("Resimulation refused: invalid lot size %r", lot_size)
        return None

    if detect_fixed_lot(events) is None:
        logger.debug("Resimulation refused: trades use different lot sizes")
        return None

    balance = initial_deposit
    simulated = []
    for event in events:
        scaled = rescale_event(event, lot_size)
        balance += scaled.net_profit
        simulated.append(replace(scaled, balance_after=balance))

    return simulated


def compare_net_profit(original: ReportMeta, simulated: ReportMeta) -> Comparison:
    """
    Compare the report's net profit with the simulated one.

    The percentage is relative to abs(original) so the sign of ``diff``
    is kept when the original was a loss; 0 when the original is 0.
    """
    original_profit = parse_plain_number(original.total_net_profit or '0')
    simulated_profit = parse_plain_number(simulated.total_net_profit or '0')
    diff = simulated_profit - original_profit
    diff_percent = diff / abs(original_profit) * 100 if original_profit != 0 else 0.0
    return Comparison(
        original=original_profit,
        simulated=simulated_profit,
        diff=diff,
        diff_percent=diff_percent,
    )


def simulated_period(events: Sequence[DataPoint]) -> str:
    """Period label like "Simulated (2024.01.02 - 2024.12.30)"."""
    if not events:
        return settings.SIMULATED_PERIOD
    start = events[0].timestamp
    end = events[-1].timestamp
    return f"{settings.SIMULATED_PERIOD} ({start:%Y.%m.%d} - {end:%Y.%m.%d})"


def run_simulation(report: ParsedReport, lot_size: Optional[float] = None) -> SimulationResult:
    """
    Resimulate a parsed report and summarise the result.

    Args:
        report: Output of parse_report.
        lot_size: Target lot size; defaults to the report's own fixed lot.

    Returns:
        SimulationResult. NO_DATA when the report has no events,
        UNAVAILABLE when the report is not fixed-lot or the lot size is
        invalid, OK otherwise.
    """
    if not report.events:
        return SimulationResult(
            status=SimulationStatus.NO_DATA,
            error="No events to simulate",
        )

    if report.fixed_lot_size is None:
        return SimulationResult(
            status=SimulationStatus.UNAVAILABLE,
            error="Simulation is only available for strategies with a fixed lot size across all trades",
        )

    if lot_size is None:
        lot_size = report.fixed_lot_size

    events = resimulate(report.events, report.initial_deposit, lot_size)
    if events is None:
        return SimulationResult(
            status=SimulationStatus.UNAVAILABLE,
            lot_size=lot_size,
            error=f"Invalid lot size: {lot_size}",
        )

    meta = compute_statistics(events, report.initial_deposit)
    meta.period = simulated_period(report.events)

    return SimulationResult(
        status=SimulationStatus.OK,
        lot_size=lot_size,
        events=events,
        meta=meta,
        comparison=compare_net_profit(report.meta, meta),
    )
