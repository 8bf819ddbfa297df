"""
Tests for report totals, CSV export and the PDF table layout
"""

import csv
import io
from datetime import datetime

from reportlab.pdfbase.pdfmetrics import stringWidth

from resort.services.booking_report import (
    ReportSummary,
    format_amount,
    report_filename,
    summarize_rows,
    write_csv,
)
from resort.services.pdf_report import (
    COLUMNS,
    FONT,
    TABLE_WIDTH,
    ReportBranding,
    fit_text,
    render_booking_report,
)


def _rows(n):
    return [
        {
            "created_at": datetime(2024, 5, 1, 9, 30),
            "name": f"Guest {i}",
            "email": f"guest{i}@example.com",
            "phone": "0771234567",
            "package_destination": "Yala",
            "package_type": "Jeep",
            "visitors": 2,
            "price": 15000,
        }
        for i in range(n)
    ]


def _render(tmp_path, rows, **kwargs):
    return render_booking_report(
        rows,
        summarize_rows(rows),
        period="monthly",
        start=datetime(2024, 1, 1),
        end=datetime(2024, 12, 31),
        output_path=tmp_path / "report.pdf",
        **kwargs,
    )


def test_summarize_rows_treats_missing_values_as_zero():
    rows = [{"price": 1000, "visitors": 2}, {"price": None, "visitors": 3}, {}]
    summary = summarize_rows(rows)
    assert summary == ReportSummary(count=3, total_visitors=5, total_sales=1000)


def test_summarize_empty():
    assert summarize_rows([]) == ReportSummary(count=0, total_visitors=0, total_sales=0)


def test_report_filename_has_no_colons_or_dots_in_stamp():
    name = report_filename("weekly", datetime(2024, 5, 1, 10, 20, 30, 123000))
    assert name == "bookings-weekly-2024-05-01T10-20-30-123Z.pdf"


def test_format_amount():
    assert format_amount(1500) == "1,500"
    assert format_amount(1234567.5) == "1,234,567.50"
    assert format_amount(None) == "0"


def test_fit_text_truncates_to_width():
    text = "a.very.long.email.address@example.com"
    fitted = fit_text(text, 60, FONT, 9)
    assert fitted.endswith("...")
    assert stringWidth(fitted, FONT, 9) <= 60
    assert fit_text("Yala", 60, FONT, 9) == "Yala"


def test_columns_fill_the_table_width():
    assert TABLE_WIDTH == 515
    assert [c.label for c in COLUMNS] == ["Date", "Name", "Email", "Phone", "Destination", "Type", "Vis", "Rs."]


def test_render_writes_a_pdf(tmp_path):
    report = _render(tmp_path, _rows(3))
    assert report.path.exists()
    assert report.path.read_bytes().startswith(b"%PDF")
    assert report.pages == 1
    assert report.rows == 3


def test_render_empty_report(tmp_path):
    report = _render(tmp_path, [])
    assert report.pages == 1
    assert report.path.stat().st_size > 0


def test_render_paginates_when_rows_overflow(tmp_path):
    # 38 rows fit below the summary box; continuation pages hold 44
    assert _render(tmp_path, _rows(38)).pages == 1
    assert _render(tmp_path, _rows(39)).pages == 2
    assert _render(tmp_path, _rows(38 + 44)).pages == 2
    assert _render(tmp_path, _rows(38 + 44 + 1)).pages == 3


def test_render_accepts_custom_branding(tmp_path):
    branding = ReportBranding(title="Lodge Bookings", currency_label="LKR")
    report = _render(tmp_path, _rows(1), branding=branding)
    assert report.pages == 1


def test_render_creates_missing_directory(tmp_path):
    rows = _rows(1)
    report = render_booking_report(
        rows,
        summarize_rows(rows),
        period="weekly",
        start=datetime(2024, 1, 1),
        end=datetime(2024, 1, 7),
        output_path=tmp_path / "nested" / "reports" / "r.pdf",
    )
    assert report.path.exists()


def test_write_csv():
    text = write_csv(_rows(2) + [{"name": "Walk-in", "price": None}])
    lines = list(csv.reader(io.StringIO(text)))
    assert lines[0] == ["Date", "Name", "Email", "Phone", "Destination", "Type", "Visitors", "Price"]
    assert lines[1][:2] == ["2024-05-01", "Guest 0"]
    assert lines[1][-2:] == ["2", "15000"]
    assert lines[3] == ["", "Walk-in", "", "", "", "", "", ""]
