"""
PDF report rendering — headline metrics table + the markdown report body.
"""
from __future__ import annotations

import datetime as dt
import io
import logging
import re
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from cashpulse.errors import RenderError

logger = logging.getLogger(__name__)

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_HEADING_STYLES = {1: "Heading1", 2: "Heading2", 3: "Heading3"}


def fmt_money(n: float) -> str:
    return f"${n:,.2f}"


def _inline(text: str) -> str:
    """Escape for reportlab's mini-markup, keeping **bold**."""
    return _BOLD_RE.sub(r"<b>\1</b>", escape(text))


def markdown_flowables(content: str, styles) -> list:
    """Map markdown headings, bullets, and paragraphs onto sample styles."""
    story = []
    for raw in content.splitlines():
        line = raw.strip()
        if not line:
            story.append(Spacer(1, 0.08 * inch))
            continue
        m = re.match(r"^(#{1,6})\s+(.*)$", line)
        if m:
            level = min(len(m.group(1)), 3)
            story.append(Paragraph(_inline(m.group(2)), styles[_HEADING_STYLES[level]]))
        elif line[:2] in ("- ", "* "):
            story.append(Paragraph(_inline(line[2:]), styles["Normal"], bulletText="•"))
        else:
            story.append(Paragraph(_inline(line), styles["Normal"]))
    return story


def metrics_table(metrics: dict) -> Table:
    data = [
        ["Revenue", "Expenses", "Net Cash Flow", "Runway"],
        [
            fmt_money(metrics["revenue"]),
            fmt_money(metrics["expenses"]),
            fmt_money(metrics["cashFlow"]),
            f"{metrics['runway']:.1f} months",
        ],
    ]
    tbl = Table(data, colWidths=[1.7 * inch] * 4)
    tbl.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1565C0")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke]),
    ]))
    return tbl


def render_pdf_report(
    title: str,
    content: str,
    generated_at: dt.datetime,
    metrics: dict,
) -> bytes:
    """Render a report to PDF bytes.

    metrics: {revenue, expenses, cashFlow, runway}
    """
    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        title=title,
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )

    story = [
        Paragraph(escape(title), styles["Title"]),
        Paragraph(f"Generated {generated_at:%B %d, %Y %H:%M} UTC", styles["Italic"]),
        Spacer(1, 0.2 * inch),
        metrics_table(metrics),
        Spacer(1, 0.3 * inch),
    ]
    story.extend(markdown_flowables(content, styles))

    try:
        doc.build(story)
    except (LayoutError, ValueError) as exc:
        logger.error("Error rendering PDF report: %s", exc)
        raise RenderError(f"Failed to render PDF report: {exc}") from exc
    return buf.getvalue()
