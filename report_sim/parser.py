"""
Report parser for MT5 strategy tester HTML reports.

Extracts the summary metrics table into a ReportMeta and the deals ledger
into a time-ordered list of DataPoint events. Report layouts vary between
brokers and terminal versions, so nothing here raises on malformed input:
missing pieces degrade to "0", 0.0 or an empty event list.
"""

import codecs
import logging
import re
import sys
from pathlib import Path
from typing import Iterable, Optional

from bs4 import BeautifulSoup

sys.path.insert(0, str(Path(__file__).parent.parent))
import settings

from report_sim.columns import ColumnMap, detect_columns, is_deals_header
from report_sim.core.models import DataPoint, ParsedReport, ReportMeta
from report_sim.numbers import is_ledger_time, parse_number, parse_timestamp

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r'[-+]?\d+')
_KNOWN_LABELS = tuple(settings.METRIC_LABELS.values()) + (
    settings.TOTAL_TRADES_LABEL,
    settings.INITIAL_DEPOSIT_LABEL,
)


def load_report(report_path: str) -> ParsedReport:
    """
    Read and parse a report file.

    Args:
        report_path: Path to the HTML report (UTF-16 as written by MT5,
            or UTF-8/cp1252 for re-saved copies).

    Returns:
        ParsedReport; empty when the file is missing or unreadable.
    """
    path = Path(report_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning("Could not read report %s: %s", path, e)
        return parse_report('')
    return parse_report(_decode_report(data))


def _decode_report(data: bytes) -> str:
    """Decode report bytes, trying settings.REPORT_ENCODINGS in order."""
    wide = data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)) or b'\x00' in data[:2000]
    for encoding in settings.REPORT_ENCODINGS:
        # Narrow text decodes "successfully" as UTF-16 into garbage
        if encoding.startswith('utf-16') and not wide:
            continue
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode('utf-8', errors='ignore')


def parse_report(html: Optional[str]) -> ParsedReport:
    """
    Parse report HTML into events, initial deposit and summary metrics.

    Parsing the same text twice gives identical results.
    """
    soup = BeautifulSoup(html or '', settings.HTML_PARSER)
    cells = [td.get_text().strip() for td in soup.find_all('td')]

    meta = _extract_meta(cells)
    initial_deposit = parse_number(_value_after(cells, settings.INITIAL_DEPOSIT_LABEL, contains=True))
    events = _extract_events(soup)
    meta.fixed_lot_size = detect_fixed_lot(events)

    logger.debug(
        "Parsed report: %d events, deposit %.2f, fixed lot %s",
        len(events), initial_deposit, meta.fixed_lot_size,
    )
    return ParsedReport(events=events, initial_deposit=initial_deposit, meta=meta)


# ── Summary table ────────────────────────────────────────────────────────


def _label_index(cells: list[str], label: str, contains: bool = False) -> int:
    for idx, text in enumerate(cells):
        if (label in text) if contains else text.startswith(label):
            return idx
    return -1


def _value_after(cells: list[str], label: str, contains: bool = False) -> Optional[str]:
    """Text of the cell following the first cell matching ``label``."""
    idx = _label_index(cells, label, contains)
    if idx == -1 or idx + 1 >= len(cells):
        return None
    return cells[idx + 1]


def _extract_meta(cells: list[str]) -> ReportMeta:
    values = {}
    for name, label in settings.METRIC_LABELS.items():
        value = _value_after(cells, label)
        values[name] = value if value is not None else settings.MISSING_METRIC_VALUE

    total_trades_text = _value_after(cells, settings.TOTAL_TRADES_LABEL) or ''
    match = _LEADING_INT.match(total_trades_text.strip())
    total_trades = int(match.group(0)) if match else 0

    return ReportMeta(total_trades=total_trades, extra=_extract_extra(cells), **values)


def _extract_extra(cells: list[str]) -> dict[str, str]:
    """Summary rows ("Label:" | value) that ReportMeta has no field for."""
    extra = {}
    for idx, text in enumerate(cells[:-1]):
        if not text.endswith(':') or text.startswith(_KNOWN_LABELS):
            continue
        key = text[:-1].strip()
        if key and key not in extra:
            extra[key] = cells[idx + 1]
    return extra


# ── Deals table ──────────────────────────────────────────────────────────


def _extract_events(soup: BeautifulSoup) -> list[DataPoint]:
    rows = soup.find_all('tr')

    header = next((row for row in rows if is_deals_header(row.get_text())), None)
    if header is None:
        logger.debug("No row with both time and profit headers")
        headers = None
    else:
        headers = [c.get_text() for c in header.find_all(['th', 'td'])]
    columns = detect_columns(headers)

    events = []
    for row in rows:
        event = _event_from_cells([td.get_text() for td in row.find_all('td')], columns)
        if event is not None:
            events.append(event)

    # Stable sort keeps report order for equal timestamps
    return sorted(events, key=lambda e: e.timestamp)


def _event_from_cells(cells: list[str], columns: ColumnMap) -> Optional[DataPoint]:
    """Build an event from one row, or None for non-ledger rows."""
    if len(cells) < columns.required_cells:
        return None

    time_str = cells[columns.time].strip()
    if not is_ledger_time(time_str):
        return None

    raw_profit = parse_number(cells[columns.profit])
    swap = parse_number(cells[columns.swap]) if columns.swap != -1 else 0.0
    commission = parse_number(cells[columns.commission]) if columns.commission != -1 else 0.0
    kind = cells[columns.type].strip().lower()

    return DataPoint(
        time=time_str,
        timestamp=parse_timestamp(time_str),
        balance_after=parse_number(cells[columns.balance]),
        # Matches the broker's Total Net Profit whatever sign convention
        # the report uses for swap and commission
        net_profit=raw_profit + swap + commission,
        volume=parse_number(cells[columns.volume]),
        kind=kind or None,
        swap=swap,
        commission=commission,
        raw_profit=raw_profit,
    )


# ── Event classification ─────────────────────────────────────────────────


def detect_fixed_lot(events: Iterable[DataPoint]) -> Optional[float]:
    """
    Common volume of every trade, or None.

    Resimulation rescales profit linearly from one lot size, which is
    only sound when every trade used the same volume.
    """
    volumes = [e.volume for e in events if e.volume > 0]
    if not volumes:
        return None
    first = volumes[0]
    if all(v == first for v in volumes):
        return first
    return None


def is_trade(event: DataPoint) -> bool:
    """True for trades; False for deposits, withdrawals and adjustments."""
    if event.kind:
        return not any(kind in event.kind for kind in settings.NON_TRADE_KINDS)
    return event.volume > 0


def trade_net_profit(events: Iterable[DataPoint]) -> float:
    """Net profit of trades only (balance operations excluded)."""
    return sum(e.net_profit for e in events if is_trade(e))
