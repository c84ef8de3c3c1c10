"""
Test Configuration and Fixtures

Provides shared fixtures for all tests.
"""
import pytest
import tempfile
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def build_report_html(summary, header, rows, header_cell='th'):
    """
    Build a minimal strategy tester report.

    Args:
        summary: list of rows, each a list of cell texts ("Label:", value, ...)
        header: deals header cell texts (None = no header row)
        rows: deals rows, each a list of cell texts
        header_cell: tag used for header cells ('th' or 'td' like MT5)
    """
    def tr(cells, tag='td'):
        return '<tr>' + ''.join(f'<{tag}>{c}</{tag}>' for c in cells) + '</tr>'

    parts = ['<!DOCTYPE html><html><head><title>Strategy Tester Report</title></head><body>']
    parts.append('<table>')
    parts.extend(tr(r) for r in summary)
    parts.append('</table>')
    parts.append('<table>')
    if header is not None:
        parts.append(tr(header, header_cell))
    parts.extend(tr(r) for r in rows)
    parts.append('</table></body></html>')
    return '\n'.join(parts)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def report_builder():
    """The build_report_html helper, for tests that assemble their own report."""
    return build_report_html


@pytest.fixture
def scenario_a_html():
    """Fixed 0.10 lot report, three trades, deals listed out of time order."""
    summary = [
        ['Period:', 'H1 (2024.01.01 - 2024.02.01)'],
        ['Initial Deposit:', '10000'],
        ['Total Net Profit:', '500.00', 'Gross Profit:', '550.00', 'Gross Loss:', '-50.00'],
        ['Profit Factor:', '11.00', 'Sharpe Ratio:', '4.21'],
        ['Balance Drawdown Maximal:', '50.00 (0.50%)', 'Balance Drawdown Relative:', '0.50% (50.00)'],
        ['Total Trades:', '3', 'Short Trades (won %):', '1 (100.00%)', 'Long Trades (won %):', '2 (50.00%)'],
        ['Recovery Factor:', '10.00', 'Expected Payoff:', '166.67'],
    ]
    header = ['Time', 'Type', 'Volume', 'Profit', 'Balance']
    rows = [
        ['2024.01.04 09:15:00', 'sell', '0.10', '450.00', '10500.00'],
        ['2024.01.02 10:00:00', 'buy', '0.10', '100.00', '10100.00'],
        ['2024.01.03 16:30:00', 'buy', '0.10', '-50.00', '10050.00'],
    ]
    return build_report_html(summary, header, rows)


@pytest.fixture
def mixed_lot_html():
    """Two trades at different volumes."""
    summary = [
        ['Initial Deposit:', '5000'],
        ['Total Net Profit:', '30.00'],
    ]
    header = ['Time', 'Type', 'Volume', 'Profit', 'Balance']
    rows = [
        ['2024.03.01 10:00:00', 'buy', '0.10', '10.00', '5010.00'],
        ['2024.03.02 10:00:00', 'sell', '0.20', '20.00', '5030.00'],
    ]
    return build_report_html(summary, header, rows)


@pytest.fixture
def mt5_deals_html():
    """Full MT5 deals layout: balance row, entry/exit deals, commission and swap."""
    summary = [
        ['Initial Deposit:', '10 000.00'],
        ['Total Net Profit:', '47.40'],
        ['Total Trades:', '1'],
    ]
    header = [
        'Time', 'Deal', 'Symbol', 'Type', 'Direction', 'Volume', 'Price',
        'Order', 'Commission', 'Swap', 'Profit', 'Balance', 'Comment',
    ]
    rows = [
        ['2024.01.02 00:00:00', '1', '', 'balance', '', '', '', '', '0.00', '0.00', '10 000.00', '10 000.00', ''],
        ['2024.01.02 10:00:00', '2', 'EURUSD', 'buy', 'in', '0.10', '1.10000', '2', '-0.70', '0.00', '0.00', '9 999.30', ''],
        ['2024.01.02 14:00:00', '3', 'EURUSD', 'sell', 'out', '0.10', '1.10500', '3', '-0.70', '-1.20', '50.00', '10 047.40', 'tp 1.10500'],
        ['', '', '', '', '', '', '', '', '-1.40', '-1.20', '50.00', '10 047.40', ''],
    ]
    return build_report_html(summary, header, rows, header_cell='td')
