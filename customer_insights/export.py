"""
Export and sharing helpers for the reports screen.

Excel workbooks go through ``pd.ExcelWriter`` with xlsxwriter, PDFs are laid
out with reportlab platypus, and email sharing only builds a ``mailto:`` link.
"""

import io
import logging
from datetime import datetime
from urllib.parse import quote

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from . import config
from .engine import as_frame, segment_by_income
from .formatting import format_currency, gender_label
from .insights import division_metrics, executive_summary, key_figures

logger = logging.getLogger("customer_insights.export")

EXPORT_COLUMNS = {
    "id": "ID",
    "name": "Name",
    "gender": "Gender",
    "age": "Age",
    "division": "Division",
    "marital_status": "Marital Status",
    "income": "Income",
}

# Characters encodeURIComponent leaves alone.
URI_SAFE = "!~*'()"

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_BG = colors.HexColor("#0f172a")
ROW_ALT_BG = colors.HexColor("#f8fafc")
GRID = colors.HexColor("#e2e8f0")


def prepare_customer_rows(customers) -> pd.DataFrame:
    df = as_frame(customers)
    rows = df[list(EXPORT_COLUMNS)].copy()
    rows["gender"] = rows["gender"].map(gender_label)
    return rows.rename(columns=EXPORT_COLUMNS).reset_index(drop=True)


def to_excel_bytes(frame: pd.DataFrame, sheet_name: str = "Report") -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
    data = output.getvalue()
    logger.info("Exported %d rows to Excel (%d bytes)", len(frame), len(data))
    return data


def to_csv_bytes(frame: pd.DataFrame) -> bytes:
    return frame.to_csv(index=False).encode("utf-8")


def mailto_link(subject: str, body: str, recipients=()) -> str:
    return f"mailto:{','.join(recipients)}?subject={quote(subject, safe=URI_SAFE)}&body={quote(body, safe=URI_SAFE)}"


def shareable_link(url: str = config.SHARE_BASE_URL) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}share=true"


def _make_table(data: list, col_widths=None) -> Table:
    table = Table(data, colWidths=col_widths, repeatRows=1)
    style = [
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, GRID),
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for i in range(2, len(data), 2):
        style.append(("BACKGROUND", (0, i), (-1, i), ROW_ALT_BG))
    table.setStyle(TableStyle(style))
    return table


def build_report_pdf(customers, title: str = "Customer Analytics Report") -> bytes:
    df = as_frame(customers)
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        title=title,
    )
    base = getSampleStyleSheet()
    h2 = ParagraphStyle("SectionH2", parent=base["Heading2"], fontSize=13, spaceBefore=12, spaceAfter=6)
    body = ParagraphStyle("Body", parent=base["Normal"], fontSize=9, leading=13)

    figures = key_figures(df)
    story = [
        Paragraph(title, base["Title"]),
        Paragraph(f"Generated {datetime.now().strftime('%B %d, %Y %H:%M')}", body),
        Spacer(1, 12),
        Paragraph("Key Figures", h2),
        _make_table(
            [
                ["Customers", "With Income", "Average Income", "Total Income", "Average Age"],
                [
                    f"{figures['total_customers']:,}",
                    f"{figures['income_percentage']}%",
                    format_currency(figures["average_income"]),
                    format_currency(figures["total_income"]),
                    str(figures["average_age"]),
                ],
            ]
        ),
        Paragraph("Summary", h2),
    ]
    story.extend(Paragraph(sentence, body) for sentence in executive_summary(df))

    story.append(Paragraph("Customer Segments", h2))
    segment_rows = [["Segment", "Customers", "Share", "Avg Age", "Avg Income"]]
    for segment in segment_by_income(df):
        segment_rows.append(
            [
                segment.name,
                str(segment.count),
                f"{segment.percentage}%",
                str(segment.average_age),
                format_currency(segment.average_income),
            ]
        )
    story.append(_make_table(segment_rows))

    story.append(Paragraph("Regional Performance", h2))
    division_rows = [["Division", "Customers", "Total Income", "Avg Income", "High Value"]]
    for row in division_metrics(df).itertuples(index=False):
        division_rows.append(
            [
                row.division,
                str(row.total_customers),
                format_currency(row.total_income),
                format_currency(row.avg_income),
                f"{row.high_value_percentage}%",
            ]
        )
    story.append(_make_table(division_rows))

    doc.build(story)
    pdf_bytes = buf.getvalue()
    buf.close()
    logger.info("Generated PDF report '%s': %d bytes", title, len(pdf_bytes))
    return pdf_bytes
