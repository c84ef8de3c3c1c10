"""
Tester Report Simulator - Settings & Lookup Tables
"""

# =============================================================================
# SUMMARY TABLE LABELS
# =============================================================================

# ReportMeta field -> literal label as printed by the MT5 strategy tester.
# A cell "starts with" the label; the value is the cell right after it.
METRIC_LABELS = {
    # Performance
    'total_net_profit': 'Total Net Profit:',
    'gross_profit': 'Gross Profit:',
    'gross_loss': 'Gross Loss:',
    'profit_factor': 'Profit Factor:',
    'sharpe_ratio': 'Sharpe Ratio:',

    # Drawdowns
    'balance_dd_max': 'Balance Drawdown Maximal:',
    'equity_dd_max': 'Equity Drawdown Maximal:',
    'balance_dd_rel': 'Balance Drawdown Relative:',
    'equity_dd_rel': 'Equity Drawdown Relative:',

    # Trade stats
    'short_trades': 'Short Trades (won %):',
    'long_trades': 'Long Trades (won %):',
    'profit_trades': 'Profit Trades (% of total):',
    'loss_trades': 'Loss Trades (% of total):',

    # Averages
    'largest_profit': 'Largest profit trade:',
    'largest_loss': 'Largest loss trade:',
    'avg_profit': 'Average profit trade:',
    'avg_loss': 'Average loss trade:',

    # Streaks
    'max_consec_wins_money': 'Maximum consecutive wins ($):',
    'max_consec_losses_money': 'Maximum consecutive losses ($):',
    'max_consec_profit_count': 'Maximal consecutive profit (count):',
    'max_consec_loss_count': 'Maximal consecutive loss (count):',
    'avg_consec_wins': 'Average consecutive wins:',
    'avg_consec_losses': 'Average consecutive losses:',

    'period': 'Period:',
}

TOTAL_TRADES_LABEL = 'Total Trades:'
INITIAL_DEPOSIT_LABEL = 'Initial Deposit:'

# Value reported for a label that is not in the document
MISSING_METRIC_VALUE = '0'

# =============================================================================
# DEALS TABLE DETECTION
# =============================================================================

# The deals header row must contain one token from EACH list (same row).
# The summary table never has both, which is how the two are told apart.
HEADER_TIME_TOKENS = ('time',)
HEADER_PROFIT_TOKENS = ('profit',)

# Semantic column -> header keywords (case-folded substring match).
# Order matters only for readability; each column resolves independently.
# New broker formats are added here, not in the parser.
COLUMN_KEYWORDS = {
    'volume': ('volume', 'size', 'lots', 'amount', 'qty'),
    'profit': ('profit', 'gain'),
    'balance': ('balance',),
    'time': ('time', 'date'),
    'type': ('type', 'direction'),
    'swap': ('swap',),
    'commission': ('commission', 'taxes', 'fee'),
}

# Positions used when a header keyword is not found. MT5 deals layout:
# Time | Deal | Symbol | Type | Direction | Volume | Price | Order |
# Commission | Swap | Profit | Balance | Comment
# -1 = absent. Swap/commission are never guessed: a wrong guess would
# silently corrupt net profit.
DEFAULT_COLUMNS = {
    'time': 0,
    'type': 2,
    'volume': 5,
    'profit': 10,
    'balance': 11,
    'swap': -1,
    'commission': -1,
}

# A ledger row starts with "YYYY.MM.DD"
LEDGER_TIME_PATTERN = r'^\d{4}\.\d{2}\.\d{2}'

TIMESTAMP_FORMATS = (
    '%Y.%m.%d %H:%M:%S',
    '%Y.%m.%d %H:%M',
    '%Y.%m.%d',
)

# Type cell vocabulary for balance operations (substring match)
NON_TRADE_KINDS = (
    'balance',
    'deposit',
    'withdrawal',
    'credit',
    'correction',
    'bonus',
    'charge',
)

# =============================================================================
# REPORT FILES
# =============================================================================

# MT5 writes UTF-16-LE with BOM; exported/edited copies are often UTF-8
REPORT_ENCODINGS = ('utf-16', 'utf-8', 'cp1252')

# BeautifulSoup tree builder
HTML_PARSER = 'html.parser'

# =============================================================================
# RECOMPUTED STATISTICS
# =============================================================================

# Fields the recomputed path cannot derive (no direction, no equity,
# no per-period returns). Emitted verbatim, never estimated.
PLACEHOLDERS = {
    'sharpe_ratio': '0.00',
    'equity_dd_max': '0.00 (0.00%)',
    'equity_dd_rel': '0.00% (0.00)',
    'short_trades': '0 (0%)',
    'long_trades': '0 (0%)',
    'avg_consec_wins': '0',
    'avg_consec_losses': '0',
}

SIMULATED_PERIOD = 'Simulated'

# =============================================================================
# PERFORMANCE BREAKDOWN
# =============================================================================

# "percentage" = profit / start balance * 100, "money" = raw profit
PERFORMANCE_MODES = ('percentage', 'money')
DEFAULT_PERFORMANCE_MODE = 'percentage'

MONTH_LABELS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

# Approximate month length for partial months in average monthly gain
DAYS_PER_MONTH = 30
