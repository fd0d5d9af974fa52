"""Report outputs: PDF narrative reports and the metrics workbook."""
from .pdf_report import render_pdf_report
from .metrics_workbook import generate_excel
