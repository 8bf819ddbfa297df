"""
PDF layout for the bookings report

Positions are tracked top-down in points, the way the page is read, and
converted to reportlab's bottom-up coordinates only when drawing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from resort.core.config import REPORT_CURRENCY_LABEL, REPORT_TITLE
from resort.services.booking_report import ReportSummary, format_amount, format_date

logger = logging.getLogger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

MARGIN = 30
TABLE_LEFT = 20
ROW_HEIGHT = 16
HEADER_LINE_GAP = 14
HEADER_TO_ROW = 6
MAX_ROW_TOP = 780
CONTINUED_HEADER_TOP = 60

SUMMARY_BOX = (40, 515, 60, 6)  # x, width, height, corner radius
SUMMARY_COLUMNS_X = (50, 240, 430)
SUMMARY_TO_TABLE = 87


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    width: float


COLUMNS = (
    Column("created_at", "Date", 58),
    Column("name", "Name", 88),
    Column("email", "Email", 100),
    Column("phone", "Phone", 68),
    Column("package_destination", "Destination", 85),
    Column("package_type", "Type", 46),
    Column("visitors", "Vis", 30),
    Column("price", "Rs.", 40),
)
TABLE_WIDTH = sum(c.width for c in COLUMNS)


@dataclass(frozen=True)
class ReportBranding:
    title: str = REPORT_TITLE
    currency_label: str = REPORT_CURRENCY_LABEL


@dataclass
class RenderedReport:
    path: Path
    pages: int
    rows: int


def fit_text(text: str, width: float, font: str, size: float) -> str:
    """Truncate `text` with '...' so it fits in `width` points."""
    if stringWidth(text, font, size) <= width:
        return text
    ellipsis = "..."
    while text and stringWidth(text + ellipsis, font, size) > width:
        text = text[:-1]
    return text + ellipsis if text else ""


def format_cell(column: Column, row: dict) -> str:
    value = row.get(column.key)
    if column.key == "created_at":
        return format_date(value)
    if column.key == "price":
        return format_amount(value)
    return "" if value is None else str(value)


class _Page:
    """Top-down drawing helpers around a reportlab canvas."""

    def __init__(self, pdf: canvas.Canvas, height: float):
        self.pdf = pdf
        self.height = height

    def text(self, x: float, top: float, value: str, font: str = FONT, size: float = 10):
        self.pdf.setFont(font, size)
        self.pdf.drawString(x, self.height - top - size, value)

    def centred(self, centre_x: float, top: float, value: str, font: str = FONT, size: float = 10):
        self.pdf.setFont(font, size)
        self.pdf.drawCentredString(centre_x, self.height - top - size, value)

    def line(self, x1: float, x2: float, top: float):
        self.pdf.line(x1, self.height - top, x2, self.height - top)

    def rounded_box(self, x: float, top: float, width: float, height: float, radius: float):
        self.pdf.roundRect(x, self.height - top - height, width, height, radius, stroke=1, fill=0)


class BookingReportRenderer:
    def __init__(self, branding: ReportBranding | None = None, pagesize=A4):
        self.branding = branding or ReportBranding()
        self.pagesize = pagesize
        self.row_font_size = 9

    def draw_header(self, page: _Page, top: float) -> float:
        x = TABLE_LEFT
        for column in COLUMNS:
            label = self.branding.currency_label if column.key == "price" else column.label
            page.text(x, top, fit_text(label, column.width - 2, FONT_BOLD, 10), FONT_BOLD, 10)
            x += column.width
        page.line(TABLE_LEFT, TABLE_LEFT + TABLE_WIDTH, top + HEADER_LINE_GAP)
        return top + HEADER_LINE_GAP + HEADER_TO_ROW

    def draw_row(self, page: _Page, row: dict, top: float) -> float:
        x = TABLE_LEFT
        size = self.row_font_size
        for column in COLUMNS:
            page.text(x, top, fit_text(format_cell(column, row), column.width - 2, FONT, size), FONT, size)
            x += column.width
        return top + ROW_HEIGHT

    def render(
        self,
        rows: list[dict],
        summary: ReportSummary,
        *,
        period: str,
        start: datetime,
        end: datetime,
        output_path: str | Path,
    ) -> RenderedReport:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        width, height = self.pagesize
        pdf = canvas.Canvas(str(output_path), pagesize=self.pagesize)
        pdf.setTitle(self.branding.title)
        page = _Page(pdf, height)

        top = MARGIN
        page.centred(width / 2, top, self.branding.title, FONT, 18)
        top += 30
        page.centred(
            width / 2,
            top,
            f"Period: {period.upper()} | From: {format_date(start)} | To: {format_date(end)}",
            FONT,
            10,
        )
        top += 17

        box_x, box_w, box_h, radius = SUMMARY_BOX
        page.rounded_box(box_x, top, box_w, box_h, radius)
        totals = (
            f"Total Bookings: {summary.count}",
            f"Total Visitors: {format_amount(summary.total_visitors)}",
            f"Total Sales: {self.branding.currency_label} {format_amount(summary.total_sales)}",
        )
        for x, value in zip(SUMMARY_COLUMNS_X, totals):
            page.text(x, top + 8, value, FONT, 12)

        y = self.draw_header(page, top + SUMMARY_TO_TABLE)
        for row in rows:
            if y > MAX_ROW_TOP:
                pdf.showPage()
                y = self.draw_header(page, CONTINUED_HEADER_TOP)
            y = self.draw_row(page, row, y)

        pages = pdf.getPageNumber()
        pdf.save()
        logger.info("Rendered %s booking rows on %s page(s) to %s", len(rows), pages, output_path)
        return RenderedReport(path=output_path, pages=pages, rows=len(rows))


def render_booking_report(
    rows: list[dict],
    summary: ReportSummary,
    *,
    period: str,
    start: datetime,
    end: datetime,
    output_path: str | Path,
    branding: ReportBranding | None = None,
) -> RenderedReport:
    return BookingReportRenderer(branding).render(
        rows, summary, period=period, start=start, end=end, output_path=output_path
    )
