"""
Period performance breakdowns for the dashboard.

Monthly and yearly gains, average monthly gain over the report period
and trade frequency. Only trades contribute profit; deposits and
withdrawals move the running balance that gains are measured against.
"""

import re
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Sequence

sys.path.insert(0, str(Path(__file__).parent.parent))
import settings

from report_sim.core.models import DataPoint, ReportMeta
from report_sim.numbers import format_fixed, parse_plain_number
from report_sim.parser import is_trade

_PERIOD_DATE = re.compile(r'(\d{4})\.(\d{2})\.(\d{2})')
_SECONDS_PER_WEEK = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class PeriodGain:
    """
    Profit earned in one month or year.

    Attributes:
        label: "Jan".."Dec" or the year.
        profit: Sum of trade profits in the period.
        start_balance: Balance when the period started.
        value: profit, or profit / start_balance * 100, rounded to 2dp.
    """
    label: str
    profit: float
    start_balance: float
    value: float

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "profit": self.profit,
            "start_balance": self.start_balance,
            "value": self.value,
        }


def _check_mode(mode: str) -> None:
    if mode not in settings.PERFORMANCE_MODES:
        raise ValueError(
            f"Unknown performance mode {mode!r}, expected one of {settings.PERFORMANCE_MODES}"
        )


def _gain_value(profit: float, start_balance: float, mode: str) -> float:
    if mode == 'percentage':
        return round(profit / (start_balance or 1) * 100, 2)
    return round(profit, 2)


def _opening_balance(events: Sequence[DataPoint], initial_deposit: float) -> float:
    if initial_deposit:
        return initial_deposit
    return events[0].balance_after if events else 0.0


def available_years(events: Sequence[DataPoint]) -> list[int]:
    """Distinct years with events, newest first."""
    return sorted({e.timestamp.year for e in events}, reverse=True)


def monthly_performance(
    events: Sequence[DataPoint],
    initial_deposit: float,
    year: int,
    mode: str = settings.DEFAULT_PERFORMANCE_MODE,
) -> list[PeriodGain]:
    """
    Gain per calendar month of ``year``, always twelve rows Jan..Dec.

    Months without events get a start balance of 1 (so a percentage of an
    empty month is 0, not a division by zero).
    """
    _check_mode(mode)
    if not events:
        return []

    profits = [0.0] * 12
    starts = [None] * 12
    balance = _opening_balance(events, initial_deposit)

    for event in events:
        if event.timestamp.year == year:
            month = event.timestamp.month - 1
            if starts[month] is None:
                starts[month] = balance
            if is_trade(event):
                profits[month] += event.net_profit
        balance += event.net_profit

    gains = []
    for month, label in enumerate(settings.MONTH_LABELS):
        start = starts[month] if starts[month] is not None else 1.0
        gains.append(PeriodGain(
            label=label,
            profit=profits[month],
            start_balance=start,
            value=_gain_value(profits[month], start, mode),
        ))
    return gains


def yearly_performance(
    events: Sequence[DataPoint],
    initial_deposit: float,
    mode: str = settings.DEFAULT_PERFORMANCE_MODE,
) -> list[PeriodGain]:
    """Gain per calendar year, oldest first."""
    _check_mode(mode)
    years: dict[int, list[float]] = {}  # year -> [profit, start balance]
    balance = _opening_balance(events, initial_deposit)

    for event in events:
        year = event.timestamp.year
        if year not in years:
            years[year] = [0.0, balance]
        if is_trade(event):
            years[year][0] += event.net_profit
        balance += event.net_profit

    return [
        PeriodGain(
            label=str(year),
            profit=profit,
            start_balance=start,
            value=_gain_value(profit, start, mode),
        )
        for year, (profit, start) in years.items()
    ]


def average_monthly_gain(meta: ReportMeta, initial_deposit: float = 0.0) -> str:
    """
    Net profit per month over the report period.

    The period text is expected to hold two dates, e.g.
    "M5 (2025.01.01 - 2026.01.01)". Partial months count as
    day difference / 30; at least one month is assumed.

    Returns:
        "$123.45", with " (1.23%)" of the deposit when it is positive,
        or "0.00" when the period cannot be read.
    """
    if not meta.period or not meta.total_net_profit:
        return '0.00'

    found = _PERIOD_DATE.findall(meta.period)
    if len(found) < 2:
        return '0.00'
    try:
        start, end = (date(int(y), int(m), int(d)) for y, m, d in found[:2])
    except ValueError:
        return '0.00'

    months = (end.year - start.year) * 12 + (end.month - start.month)
    months += (end.day - start.day) / settings.DAYS_PER_MONTH
    months = max(months, 1)

    per_month = parse_plain_number(meta.total_net_profit) / months
    result = f"${format_fixed(per_month)}"
    if initial_deposit and initial_deposit > 0:
        result += f" ({format_fixed(per_month / initial_deposit * 100)}%)"
    return result


def trades_per_week(events: Sequence[DataPoint], total_trades: int) -> str:
    """Average trades per week between the first and last event."""
    if not events:
        return format_fixed(0)
    span = (events[-1].timestamp - events[0].timestamp).total_seconds()
    weeks = max(1.0, span / _SECONDS_PER_WEEK)
    return format_fixed(total_trades / weeks)
