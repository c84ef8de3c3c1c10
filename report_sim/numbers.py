"""
Number and time parsing for strategy tester reports.

Report cells come from different locales: thousands separators may be
spaces, NBSPs or commas, decimals may be commas, and minus signs may be
typographic dashes. Everything here degrades to 0 / epoch instead of
raising.
"""

import math
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))
import settings

# en dash, em dash, minus sign
_MINUS_VARIANTS = re.compile('[\u2013\u2014\u2212]')
_WHITESPACE = re.compile(r'\s+')
# Leading float literal, the part a lenient parser would consume
_FLOAT_PREFIX = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')
_LEDGER_TIME = re.compile(settings.LEDGER_TIME_PATTERN)
_DATETIME_PREFIX = re.compile(r'\d{4}\.\d{2}\.\d{2}(?:\s+\d{2}:\d{2}(?::\d{2})?)?')

EPOCH = datetime(1970, 1, 1)


def _leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def parse_number(value: Optional[str]) -> float:
    """
    Parse a numeric cell, handling locale variants.

    "1,234.56" -> 1234.56, "1234,56" -> 1234.56, "1 234.56" -> 1234.56,
    "−12.30" -> -12.3. Empty, missing or unparsable text -> 0.0.
    """
    if not value:
        return 0.0
    cleaned = _WHITESPACE.sub('', value)
    cleaned = _MINUS_VARIANTS.sub('-', cleaned)
    if ',' in cleaned and '.' not in cleaned:
        # European decimal comma
        cleaned = cleaned.replace(',', '.', 1)
    else:
        cleaned = cleaned.replace(',', '')
    return _leading_float(cleaned)


def parse_plain_number(value: Optional[str]) -> float:
    """
    Parse a summary value such as "1 234.56" or "12,345.67 (3.2%)".

    Whitespace and every comma are stripped; decimal commas are not
    recognised here.
    """
    if not value:
        return 0.0
    cleaned = _WHITESPACE.sub('', value).replace(',', '')
    return _leading_float(cleaned)


def is_ledger_time(text: Optional[str]) -> bool:
    """True when text starts like a ledger time ("2024.01.15...")."""
    return bool(text) and _LEDGER_TIME.match(text) is not None


def parse_timestamp(time_str: str) -> datetime:
    """Parse an MT5 time ("2024.01.15 10:30:00", seconds/time optional)."""
    time_str = time_str.strip()
    candidates = [time_str]
    match = _DATETIME_PREFIX.match(time_str)
    if match and match.group(0) != time_str:
        # Trailing text after the time (milliseconds, comments)
        candidates.append(match.group(0))
    for candidate in candidates:
        candidate = _WHITESPACE.sub(' ', candidate)
        for fmt in settings.TIMESTAMP_FORMATS:
            try:
                return datetime.strptime(candidate, fmt)
            except ValueError:
                continue
    return EPOCH


def format_fixed(value: float, digits: int = 2) -> str:
    """Format with fixed decimals; never renders "-0.00"."""
    text = f"{value:.{digits}f}"
    if text.startswith('-') and float(text) == 0:
        return text[1:]
    return text
