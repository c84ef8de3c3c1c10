"""
Statistics engine: recompute report metrics from an event sequence.

Used for resimulated sequences, where the broker's own summary no longer
applies. Coverage is narrower than the broker report: fields that need
trade direction, equity or per-period returns are emitted as fixed
placeholders (settings.PLACEHOLDERS), never estimated.
"""

import sys
from pathlib import Path
from typing import Sequence

sys.path.insert(0, str(Path(__file__).parent.parent))
import settings

from report_sim.core.models import DataPoint, ReportMeta
from report_sim.numbers import format_fixed


def compute_statistics(events: Sequence[DataPoint], starting_balance: float) -> ReportMeta:
    """
    Compute a ReportMeta from events in one left-to-right pass.

    Args:
        events: Events in chronological order (not re-sorted here).
            ``net_profit`` and ``balance_after`` are the values summarised.
        starting_balance: Balance before the first event; initial peak
            for drawdown tracking.

    Returns:
        ReportMeta with formatted values. Empty input gives
        ``ReportMeta(total_trades=0)`` with nothing else populated.
    """
    if not events:
        return ReportMeta(total_trades=0)

    gross_profit = 0.0
    gross_loss = 0.0
    wins = 0
    losses = 0
    win_sum = 0.0
    loss_sum = 0.0
    largest_profit = 0.0
    largest_loss = 0.0

    # Streaks: counts and money tracked independently
    current_wins = 0
    current_losses = 0
    current_win_money = 0.0
    current_loss_money = 0.0
    max_wins = 0
    max_losses = 0
    max_win_money = 0.0
    max_loss_money = 0.0

    # Balance drawdown
    peak = starting_balance
    max_dd = 0.0
    max_dd_rel = 0.0

    for event in events:
        profit = event.net_profit

        if event.volume > 0:
            if profit >= 0:
                gross_profit += profit
                wins += 1
                win_sum += profit
                largest_profit = max(largest_profit, profit)

                current_wins += 1
                current_win_money += profit
                current_losses = 0
                current_loss_money = 0.0
            else:
                gross_loss += abs(profit)
                losses += 1
                loss_sum += profit
                largest_loss = min(largest_loss, profit)

                current_losses += 1
                current_loss_money += profit
                current_wins = 0
                current_win_money = 0.0

            max_wins = max(max_wins, current_wins)
            max_losses = max(max_losses, current_losses)
            max_win_money = max(max_win_money, current_win_money)
            # Loss streak money is negative; keep the most negative
            max_loss_money = min(max_loss_money, current_loss_money)

        # Every event moves the balance, trades or not
        balance = event.balance_after
        if balance > peak:
            peak = balance
        else:
            dd = peak - balance
            max_dd = max(max_dd, dd)
            if peak > 0:
                max_dd_rel = max(max_dd_rel, dd / peak * 100)

    total_trades = wins + losses
    net_profit = gross_profit - gross_loss
    # No losses: report gross profit rather than infinity
    profit_factor = gross_profit / gross_loss if gross_loss != 0 else gross_profit
    avg_profit = win_sum / wins if wins else 0.0
    avg_loss = loss_sum / losses if losses else 0.0

    # Relative figure of the max absolute drawdown uses the final peak
    max_dd_pct = max_dd / peak * 100 if peak > 0 else 0.0

    return ReportMeta(
        total_net_profit=format_fixed(net_profit),
        gross_profit=format_fixed(gross_profit),
        gross_loss=format_fixed(-gross_loss),
        profit_factor=format_fixed(profit_factor),
        sharpe_ratio=settings.PLACEHOLDERS['sharpe_ratio'],

        balance_dd_max=f"{format_fixed(max_dd)} ({format_fixed(max_dd_pct)}%)",
        equity_dd_max=settings.PLACEHOLDERS['equity_dd_max'],
        balance_dd_rel=f"{format_fixed(max_dd_rel)}% ({format_fixed(max_dd)})",
        equity_dd_rel=settings.PLACEHOLDERS['equity_dd_rel'],

        total_trades=total_trades,
        profit_trades=_count_with_share(wins, total_trades),
        loss_trades=_count_with_share(losses, total_trades),
        short_trades=settings.PLACEHOLDERS['short_trades'],
        long_trades=settings.PLACEHOLDERS['long_trades'],

        largest_profit=format_fixed(largest_profit),
        largest_loss=format_fixed(largest_loss),
        avg_profit=format_fixed(avg_profit),
        avg_loss=format_fixed(avg_loss),

        max_consec_wins_money=format_fixed(max_win_money),
        max_consec_losses_money=format_fixed(max_loss_money),
        max_consec_profit_count=str(max_wins),
        max_consec_loss_count=str(max_losses),
        avg_consec_wins=settings.PLACEHOLDERS['avg_consec_wins'],
        avg_consec_losses=settings.PLACEHOLDERS['avg_consec_losses'],

        period=settings.SIMULATED_PERIOD,
    )


def _count_with_share(count: int, total: int) -> str:
    """Format as "12 (34.00%)"."""
    share = count / total * 100 if total else 0.0
    return f"{count} ({format_fixed(share)}%)"
