"""
Tester Report Simulator

Parses MT5 strategy tester HTML reports, recomputes statistics from the
deals ledger and resimulates the balance curve at a different lot size.

IMPORT PATTERN: import from the modules directly:
    from report_sim.parser import parse_report
    from report_sim.statistics import compute_statistics
    from report_sim.simulation import resimulate

Or use the package-level names below (lazy-loaded when accessed).
"""


def __getattr__(name):
    """Lazy loading so importing the package does not pull in bs4."""
    if name == 'parse_report':
        from .parser import parse_report
        return parse_report
    elif name == 'load_report':
        from .parser import load_report
        return load_report
    elif name == 'detect_fixed_lot':
        from .parser import detect_fixed_lot
        return detect_fixed_lot
    elif name == 'compute_statistics':
        from .statistics import compute_statistics
        return compute_statistics
    elif name == 'resimulate':
        from .simulation import resimulate
        return resimulate
    elif name == 'run_simulation':
        from .simulation import run_simulation
        return run_simulation
    elif name == 'compare_net_profit':
        from .simulation import compare_net_profit
        return compare_net_profit
    elif name == 'parse_number':
        from .numbers import parse_number
        return parse_number
    raise AttributeError(f"module 'report_sim' has no attribute '{name}'")


__all__ = [
    'parse_report',
    'load_report',
    'detect_fixed_lot',
    'compute_statistics',
    'resimulate',
    'run_simulation',
    'compare_net_profit',
    'parse_number',
]
