"""Tests for report parser module."""

import sys
from pathlib import Path
from datetime import datetime
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from report_sim.core.models import DataPoint
from report_sim.parser import (
    parse_report,
    load_report,
    detect_fixed_lot,
    is_trade,
    trade_net_profit,
    _decode_report,
)


def _make_event(volume, kind=None, profit=0.0):
    return DataPoint(
        time='2024.01.01 00:00:00',
        timestamp=datetime(2024, 1, 1),
        balance_after=0.0,
        net_profit=profit,
        volume=volume,
        kind=kind,
    )


class TestScenarioA:
    """Fixed-lot report with a simple five column deals table."""

    def test_events_sorted_by_time(self, scenario_a_html):
        report = parse_report(scenario_a_html)

        assert len(report.events) == 3
        times = [e.timestamp for e in report.events]
        assert times == sorted(times)
        assert [e.net_profit for e in report.events] == [100.0, -50.0, 450.0]
        assert [e.balance_after for e in report.events] == [10100.0, 10050.0, 10500.0]

    def test_initial_deposit(self, scenario_a_html):
        report = parse_report(scenario_a_html)
        assert report.initial_deposit == 10000.0

    def test_fixed_lot_size(self, scenario_a_html):
        report = parse_report(scenario_a_html)
        assert report.fixed_lot_size == 0.10
        assert report.meta.fixed_lot_size == 0.10

    def test_meta_values_kept_as_text(self, scenario_a_html):
        meta = parse_report(scenario_a_html).meta

        assert meta.total_net_profit == '500.00'
        assert meta.gross_loss == '-50.00'
        assert meta.profit_factor == '11.00'
        assert meta.balance_dd_max == '50.00 (0.50%)'
        assert meta.short_trades == '1 (100.00%)'
        assert meta.period == 'H1 (2024.01.01 - 2024.02.01)'
        assert meta.total_trades == 3

    def test_missing_metrics_default_to_zero_text(self, scenario_a_html):
        meta = parse_report(scenario_a_html).meta

        assert meta.equity_dd_max == '0'
        assert meta.largest_profit == '0'
        assert meta.avg_consec_losses == '0'

    def test_unrecognised_metrics_in_extra(self, scenario_a_html):
        meta = parse_report(scenario_a_html).meta

        assert meta.extra['Recovery Factor'] == '10.00'
        assert meta.extra['Expected Payoff'] == '166.67'
        assert 'Total Net Profit' not in meta.extra
        assert 'Initial Deposit' not in meta.extra

    def test_event_components(self, scenario_a_html):
        event = parse_report(scenario_a_html).events[0]

        assert event.time == '2024.01.02 10:00:00'
        assert event.kind == 'buy'
        assert event.raw_profit == 100.0
        assert event.swap == 0.0
        assert event.commission == 0.0

    def test_parsing_is_idempotent(self, scenario_a_html):
        assert parse_report(scenario_a_html) == parse_report(scenario_a_html)


class TestScenarioC:
    """Trades at different volumes."""

    def test_fixed_lot_unset(self, mixed_lot_html):
        report = parse_report(mixed_lot_html)

        assert len(report.events) == 2
        assert report.fixed_lot_size is None


class TestMT5DealsLayout:
    """Thirteen column MT5 deals table with td header cells."""

    def test_rows_parsed(self, mt5_deals_html):
        report = parse_report(mt5_deals_html)

        # Totals row without a time is not a ledger row
        assert len(report.events) == 3
        assert report.initial_deposit == 10000.0

    def test_net_profit_includes_swap_and_commission(self, mt5_deals_html):
        exit_deal = parse_report(mt5_deals_html).events[2]

        assert exit_deal.raw_profit == 50.0
        assert exit_deal.swap == -1.20
        assert exit_deal.commission == -0.70
        assert exit_deal.net_profit == pytest.approx(48.10)
        assert exit_deal.balance_after == 10047.40

    def test_balance_row(self, mt5_deals_html):
        deposit = parse_report(mt5_deals_html).events[0]

        assert deposit.kind == 'balance'
        assert deposit.volume == 0.0
        assert deposit.net_profit == 10000.0

    def test_fixed_lot_ignores_balance_rows(self, mt5_deals_html):
        assert parse_report(mt5_deals_html).fixed_lot_size == 0.10

    def test_trade_net_profit_matches_report(self, mt5_deals_html):
        report = parse_report(mt5_deals_html)
        assert trade_net_profit(report.events) == pytest.approx(47.40)


class TestColumnFallback:
    """Reports whose deals header cannot be found."""

    def test_default_positions_used_without_header(self, report_builder):
        row = ['2024.05.01 12:00:00', '7', 'buy', 'EURUSD', 'in', '0.50',
               '1.1', '7', '', '', '25.00', '1025.00']
        html = report_builder([['Initial Deposit:', '1000']], None, [row])

        report = parse_report(html)

        assert len(report.events) == 1
        event = report.events[0]
        assert event.kind == 'buy'
        assert event.volume == 0.5
        assert event.net_profit == 25.0
        assert event.balance_after == 1025.0

    def test_unmatched_header_gives_empty_dataset(self, report_builder):
        # "Date"/"Gain" do not satisfy the time+profit header rule, so the
        # default 12-column layout is assumed and short rows are skipped
        html = report_builder(
            [],
            ['Date', 'Type', 'Size', 'Gain', 'Balance'],
            [['2024.05.01', 'buy', '0.10', '5.00', '1005.00']],
        )

        report = parse_report(html)

        assert report.events == []
        assert report.fixed_lot_size is None

    def test_keyword_alternatives(self, report_builder):
        html = report_builder(
            [],
            ['Open Time', 'Direction', 'Lots', 'Profit', 'Balance', 'Fee', 'Swap'],
            [['2024.05.01 08:00', 'sell', '1,5', '10,00', '1 009,50', '-0,25', '-0,25']],
        )

        event = parse_report(html).events[0]

        assert event.volume == 1.5
        assert event.raw_profit == 10.0
        assert event.commission == -0.25
        assert event.swap == -0.25
        assert event.net_profit == pytest.approx(9.5)
        assert event.balance_after == 1009.5
        assert event.timestamp == datetime(2024, 5, 1, 8, 0)

    def test_short_rows_skipped(self, report_builder):
        html = report_builder(
            [],
            ['Time', 'Type', 'Volume', 'Profit', 'Balance'],
            [
                ['2024.05.01 08:00:00', 'buy', '0.10', '5.00'],
                ['2024.05.02 08:00:00', 'buy', '0.10', '5.00', '1010.00'],
            ],
        )

        events = parse_report(html).events

        assert len(events) == 1
        assert events[0].balance_after == 1010.0

    def test_non_ledger_rows_skipped(self, report_builder):
        html = report_builder(
            [],
            ['Time', 'Type', 'Volume', 'Profit', 'Balance'],
            [
                ['Orders', '', '', '', ''],
                ['01.05.2024', 'buy', '0.10', '5.00', '1005.00'],
                ['2024.05.02', 'buy', '0.10', '5.00', '1010.00'],
            ],
        )

        events = parse_report(html).events

        assert len(events) == 1
        assert events[0].timestamp == datetime(2024, 5, 2)


class TestDegradedInput:
    """Malformed input never raises."""

    @pytest.mark.parametrize('html', ['', None, 'not html at all', '<table><tr><td>'])
    def test_garbage(self, html):
        report = parse_report(html)

        assert report.events == []
        assert report.initial_deposit == 0.0
        assert report.meta.total_trades == 0
        assert report.meta.total_net_profit == '0'
        assert report.fixed_lot_size is None

    def test_unparsable_deposit(self, report_builder):
        html = report_builder([['Initial Deposit:', 'n/a']], None, [])
        assert parse_report(html).initial_deposit == 0.0

    def test_label_in_last_cell(self):
        html = '<table><tr><td>Total Net Profit:</td></tr></table>'
        assert parse_report(html).meta.total_net_profit == '0'


class TestDetectFixedLot:
    """Test fixed lot detection."""

    def test_all_equal(self):
        events = [_make_event(0.0, 'balance'), _make_event(0.3), _make_event(0.3)]
        assert detect_fixed_lot(events) == 0.3

    def test_differing_volumes(self):
        assert detect_fixed_lot([_make_event(0.3), _make_event(0.31)]) is None

    def test_no_trades(self):
        assert detect_fixed_lot([_make_event(0.0, 'balance')]) is None
        assert detect_fixed_lot([]) is None


class TestIsTrade:
    """Test trade / balance operation classification."""

    def test_kind_vocabulary(self):
        assert not is_trade(_make_event(0.0, 'balance'))
        assert not is_trade(_make_event(0.0, 'deposit'))
        assert not is_trade(_make_event(0.0, 'withdrawal'))
        assert is_trade(_make_event(0.1, 'buy'))

    def test_kind_wins_over_volume(self):
        assert not is_trade(_make_event(1.0, 'balance'))

    def test_volume_fallback(self):
        assert is_trade(_make_event(0.1))
        assert not is_trade(_make_event(0.0))


class TestLoadReport:
    """Test reading report files."""

    def test_utf16_file(self, temp_dir, scenario_a_html):
        path = temp_dir / 'ReportTester.html'
        path.write_text(scenario_a_html, encoding='utf-16')

        report = load_report(str(path))

        assert len(report.events) == 3
        assert report.meta.total_net_profit == '500.00'

    def test_utf8_file(self, temp_dir, scenario_a_html):
        path = temp_dir / 'report.htm'
        path.write_text(scenario_a_html, encoding='utf-8')

        assert load_report(str(path)).fixed_lot_size == 0.10

    def test_file_not_found(self, temp_dir):
        report = load_report(str(temp_dir / 'missing.html'))

        assert report.events == []
        assert report.initial_deposit == 0.0

    def test_decode_cp1252(self):
        assert _decode_report('Profit € 5'.encode('cp1252')) == 'Profit € 5'
