"""
Booking report helpers: totals, file naming and CSV export
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime

CSV_COLUMNS = [
    ("created_at", "Date"),
    ("name", "Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("package_destination", "Destination"),
    ("package_type", "Type"),
    ("visitors", "Visitors"),
    ("price", "Price"),
]


@dataclass
class ReportSummary:
    count: int = 0
    total_visitors: float = 0
    total_sales: float = 0


def _number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def summarize_rows(rows: list[dict]) -> ReportSummary:
    summary = ReportSummary()
    for row in rows:
        summary.count += 1
        summary.total_visitors += _number(row.get("visitors"))
        summary.total_sales += _number(row.get("price"))
    return summary


def report_filename(period: str, now: datetime | None = None) -> str:
    """bookings-<period>-<ISO timestamp with ':' and '.' replaced by '-'>.pdf"""
    stamp = (now or datetime.utcnow()).isoformat(timespec="milliseconds")
    stamp = stamp.replace(":", "-").replace(".", "-")
    return f"bookings-{period}-{stamp}Z.pdf"


def format_amount(value) -> str:
    """Thousands separators; decimals only when the value has them."""
    number = _number(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def format_date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    return "" if value is None else str(value)[:10]


def write_csv(rows: list[dict]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([label for _, label in CSV_COLUMNS])
    for row in rows:
        line = []
        for key, _ in CSV_COLUMNS:
            value = row.get(key)
            if key == "created_at":
                value = format_date(value)
            line.append("" if value is None else value)
        writer.writerow(line)
    return buffer.getvalue()
