"""
Workbook palette: fonts, fills, borders, alignments for the metrics export.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------
PULSE_BLUE = "1565C0"
DEEP_BLUE = "0D47A1"
PALE_BLUE = "E3F2FD"
STRIPE = "F5F7FA"
WHITE = "FFFFFF"
INK = "212121"
MUTED = "616161"
GAIN_GREEN = "2E7D32"
LOSS_RED = "C62828"
PALE_RED = "FFEBEE"
PALE_AMBER = "FFF8E1"
RULE_GRAY = "CFD8DC"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=22, bold=True, color=DEEP_BLUE)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=MUTED)
SECTION_FONT = Font(name="Calibri", size=14, bold=True, color=DEEP_BLUE)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=INK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=INK)
KPI_VALUE_FONT = Font(name="Calibri", size=24, bold=True, color=DEEP_BLUE)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=MUTED)
GAIN_KPI_FONT = Font(name="Calibri", size=24, bold=True, color=GAIN_GREEN)
LOSS_KPI_FONT = Font(name="Calibri", size=24, bold=True, color=LOSS_RED)
AREA_TITLE_FONT = Font(name="Calibri", size=12, bold=True, color=INK)
AREA_BODY_FONT = Font(name="Calibri", size=10, color=INK)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=PULSE_BLUE, end_color=PULSE_BLUE, fill_type="solid")
STRIPE_FILL = PatternFill(start_color=STRIPE, end_color=STRIPE, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=PALE_BLUE, end_color=PALE_BLUE, fill_type="solid")
HIGH_PRIORITY_FILL = PatternFill(start_color=PALE_RED, end_color=PALE_RED, fill_type="solid")
MEDIUM_PRIORITY_FILL = PatternFill(start_color=PALE_AMBER, end_color=PALE_AMBER, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
_thin = Side(style="thin", color=RULE_GRAY)
THIN_BORDER = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
HEADER_BORDER = Border(
    left=Side(style="thin", color=DEEP_BLUE),
    right=Side(style="thin", color=DEEP_BLUE),
    top=Side(style="thin", color=DEEP_BLUE),
    bottom=Side(style="medium", color=DEEP_BLUE),
)
TOTAL_BORDER = Border(left=_thin, right=_thin, top=Side(style="medium", color=MUTED), bottom=_thin)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
WRAP = Alignment(horizontal="left", vertical="top", wrap_text=True)

# ---------------------------------------------------------------------------
# Target-area priority → fill
# ---------------------------------------------------------------------------
PRIORITY_FILLS = {
    "high": HIGH_PRIORITY_FILL,
    "medium": MEDIUM_PRIORITY_FILL,
}

# Number formats by column type
NUMBER_FORMATS = {
    "currency": '"$"#,##0.00',
    "percent": '0.0"%"',
    "number": "#,##0",
    "decimal": "0.00",
}
