"""Weekly summary PDF: flowing text with page breaks at the bottom margin."""

import logging
from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..models.document import RenderedDocument
from ..models.report import WeeklyReportData
from ..utils.calculations import format_number
from ..utils.file_utils import FileUtils
from .errors import ReportRenderError

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm


class _TextFlow:
    """Writes wrapped lines top-down, adding pages as the cursor runs out."""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.y = PAGE_HEIGHT - MARGIN
        self.pages = 1

    def _wrap(self, text: str, font: str, size: float):
        width = PAGE_WIDTH - 2 * MARGIN
        lines, current = [], ""
        for word in (text or "").split():
            candidate = f"{current} {word}" if current else word
            if current and stringWidth(candidate, font, size) > width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current or not lines:
            lines.append(current)
        return lines

    def add(self, text: str, size: float = 12, bold: bool = False):
        font = "Helvetica-Bold" if bold else "Helvetica"
        for line in self._wrap(text, font, size):
            if self.y < MARGIN:
                self.c.showPage()
                self.pages += 1
                self.y = PAGE_HEIGHT - MARGIN
            self.c.setFont(font, size)
            self.c.drawString(MARGIN, self.y, line)
            self.y -= size * 0.5 * mm

    def gap(self, amount: float = 10):
        self.y -= amount * mm


def render_weekly_pdf(weekly: WeeklyReportData) -> bytes:
    bio = BytesIO()
    c = canvas.Canvas(bio, pagesize=A4)
    flow = _TextFlow(c)

    flow.add("WEEKLY CONSTRUCTION REPORT", 20, bold=True)
    flow.gap()

    flow.add(f"Project: {weekly.project_name or 'N/A'}", 14, bold=True)
    flow.add(f"Client: {weekly.client or 'N/A'}")
    flow.add(f"Contractor: {weekly.contractor or 'N/A'}")
    flow.add(f"Period: {weekly.start_date} to {weekly.end_date}", bold=True)
    flow.gap()

    flow.add("REPORT SUMMARY", 16, bold=True)
    flow.add(f"Total Daily Reports: {weekly.total_reports}")
    flow.add(f"Submitted Reports: {weekly.submitted_reports}")
    flow.gap()

    if weekly.overall_progress:
        flow.add("OVERALL PROGRESS", 14, bold=True)
        flow.add(weekly.overall_progress, 11)
        flow.gap()

    if weekly.key_highlights:
        flow.add("KEY HIGHLIGHTS", 14, bold=True)
        for index, highlight in enumerate(weekly.key_highlights, start=1):
            flow.add(f"{index}. {highlight}", 11)
        flow.gap()

    if weekly.manpower:
        flow.add("MANPOWER SUMMARY", 14, bold=True)
        for role in weekly.manpower:
            flow.add(f"{role.role}: {format_number(role.total)} personnel", 11)
        flow.gap()

    if weekly.machinery:
        flow.add("MACHINERY USED", 14, bold=True)
        for machine in weekly.machinery:
            flow.add(f"{machine.description}: {format_number(machine.total)} {machine.unit}".rstrip(), 11)
        flow.gap()

    if weekly.materials:
        flow.add("MATERIALS DELIVERED", 14, bold=True)
        for material in weekly.materials:
            flow.add(f"{material.description}: {format_number(material.total)} {material.unit}".rstrip(), 11)

    c.save()
    return bio.getvalue()


def generate_weekly_pdf_report(weekly: WeeklyReportData, file_name: Optional[str] = None) -> RenderedDocument:
    """Generate the weekly summary PDF."""
    logger.info(f"Generating weekly PDF for '{weekly.project_name}' {weekly.start_date}..{weekly.end_date}")
    try:
        data = render_weekly_pdf(weekly)
    except Exception as e:
        logger.exception("Weekly PDF generation failed")
        raise ReportRenderError(f"Could not generate the weekly PDF report: {e}", fmt="pdf") from e
    default = FileUtils.weekly_report_file_name(weekly.project_name, weekly.start_date, weekly.end_date)
    return RenderedDocument(FileUtils.resolve_file_name(file_name, default), data)
