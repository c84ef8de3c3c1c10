"""
Deals table column detection.

Brokers shuffle, rename and drop columns, so positions are resolved once
per document from the header row using the keyword table in settings,
with fixed MT5 positions as fallback.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

sys.path.insert(0, str(Path(__file__).parent.parent))
import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnMap:
    """Resolved cell index per semantic column (-1 = absent)."""
    time: int
    type: int
    volume: int
    profit: int
    balance: int
    swap: int = -1
    commission: int = -1

    @property
    def required_cells(self) -> int:
        """Minimum cells a row needs to cover every resolved index."""
        return max(
            self.time, self.type, self.volume, self.profit,
            self.balance, self.swap, self.commission,
        ) + 1

    def to_dict(self) -> dict[str, int]:
        return {
            "time": self.time,
            "type": self.type,
            "volume": self.volume,
            "profit": self.profit,
            "balance": self.balance,
            "swap": self.swap,
            "commission": self.commission,
        }


DEFAULT_COLUMN_MAP = ColumnMap(**settings.DEFAULT_COLUMNS)


def is_deals_header(row_text: str) -> bool:
    """True when a row's text carries both a time and a profit token."""
    text = row_text.lower()
    return (
        any(token in text for token in settings.HEADER_TIME_TOKENS)
        and any(token in text for token in settings.HEADER_PROFIT_TOKENS)
    )


def find_column(headers: list[str], keywords: Iterable[str]) -> int:
    """Index of the first header containing any keyword, else -1."""
    keywords = tuple(keywords)
    for idx, header in enumerate(headers):
        if any(keyword in header for keyword in keywords):
            return idx
    return -1


def detect_columns(headers: Optional[list[str]]) -> ColumnMap:
    """
    Resolve column positions from header cell texts.

    Args:
        headers: Header cell texts in order, or None when no header row
            was found (every column falls back to its default).

    Returns:
        ColumnMap with one index per semantic column.
    """
    if headers is None:
        logger.debug("No deals header row, using default columns")
        return DEFAULT_COLUMN_MAP

    folded = [h.strip().lower() for h in headers]
    resolved = {}
    for column, keywords in settings.COLUMN_KEYWORDS.items():
        idx = find_column(folded, keywords)
        if idx == -1:
            idx = settings.DEFAULT_COLUMNS[column]
            logger.debug("Column %r not in header, default %d", column, idx)
        resolved[column] = idx
    return ColumnMap(**resolved)
