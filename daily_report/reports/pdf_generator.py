"""PDF report generator using the ReportLab canvas.

The page is laid out top-down in millimetres: a single cursor ``y`` moves
down the page and every block checks, before drawing, whether it still fits
above the footer. ReportLab's origin is the bottom-left corner, so all
drawing goes through ``_PageCursor`` which flips the axis.
"""

import logging
import os
import tempfile
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..config import paths, settings
from ..models.document import RenderedDocument
from ..models.report import ReportData
from ..utils.calculations import format_number
from ..utils.file_utils import FileUtils
from .errors import ReportRenderError
from .layout import ReportLayout, ResourceTablePair, TextPanels, build_layout, report_file_name

logger = logging.getLogger(__name__)

PAGE_WIDTH = A4[0] / mm
PAGE_HEIGHT = A4[1] / mm
MARGIN = 15
CONTENT_WIDTH = PAGE_WIDTH - MARGIN * 2
TOP_MARGIN = 20
BOTTOM_LIMIT = PAGE_HEIGHT - 20  # keep clear of the footer line

PANEL_GAP = 2
PANEL_LINE_HEIGHT = 5
TABLE_GAP = 2
ROW_HEIGHT = 5.5
CELL_PADDING = 2

# Column widths per side, in mm; both add up to half the content width
UNIT_COLUMNS = [38, 15, 12, 12, 12]
PLAIN_COLUMNS = [53, 12, 12, 12]

BLUE = colors.HexColor(f"#{settings.BRAND_BLUE}")
TINT = colors.HexColor(f"#{settings.HEADER_TINT}")
STRIPE = colors.HexColor(f"#{settings.STRIPE}")
GRID = colors.HexColor(f"#{settings.GRID_GRAY}")


class _PageCursor:
    """Canvas wrapper that draws in top-down millimetre coordinates."""

    def __init__(self, c: canvas.Canvas, generated_on: str):
        self.c = c
        self.y = TOP_MARGIN
        self.pages = 1
        self.generated_on = generated_on

    def _flip(self, y: float) -> float:
        return (PAGE_HEIGHT - y) * mm

    def font(self, size: float, bold: bool = False):
        self.c.setFont("Helvetica-Bold" if bold else "Helvetica", size)

    def text(self, x: float, y: float, s: str, align: str = "left"):
        if not s:
            return
        if align == "center":
            self.c.drawCentredString(x * mm, self._flip(y), s)
        elif align == "right":
            self.c.drawRightString(x * mm, self._flip(y), s)
        else:
            self.c.drawString(x * mm, self._flip(y), s)

    def rect(self, x: float, y: float, w: float, h: float, fill=None, stroke=None):
        if fill is not None:
            self.c.setFillColor(fill)
        if stroke is not None:
            self.c.setStrokeColor(stroke)
        self.c.rect(x * mm, self._flip(y + h), w * mm, h * mm,
                    stroke=1 if stroke is not None else 0,
                    fill=1 if fill is not None else 0)

    def vline(self, x: float, y1: float, y2: float):
        self.c.line(x * mm, self._flip(y1), x * mm, self._flip(y2))

    def hline(self, x1: float, x2: float, y: float):
        self.c.line(x1 * mm, self._flip(y), x2 * mm, self._flip(y))

    def image(self, data: bytes, x: float, y: float, w: float, h: float):
        self.c.drawImage(ImageReader(BytesIO(data)), x * mm, self._flip(y + h), w * mm, h * mm,
                         preserveAspectRatio=True, mask="auto")

    def footer(self):
        self.c.setFillColor(colors.grey)
        self.font(8)
        self.text(PAGE_WIDTH / 2, PAGE_HEIGHT - 10, f"Generated on {self.generated_on}", align="center")
        self.c.setFillColor(colors.black)

    def ensure_room(self, height: float) -> bool:
        """Start a new page when ``height`` mm no longer fit below the cursor."""
        if self.y + height <= BOTTOM_LIMIT:
            return False
        self.footer()
        self.c.showPage()
        self.pages += 1
        self.y = TOP_MARGIN
        return True


def _draw_logo(cur: _PageCursor, path, x: float, y: float, w: float, h: float):
    logo = FileUtils.load_logo_bytes(path)
    if not logo:
        return
    try:
        cur.image(logo, x, y, w, h)
    except Exception as e:
        # Unreadable images are skipped; the report renders without that logo
        logger.warning(f"Failed to add logo {path}: {e}")


def _draw_header(cur: _PageCursor, layout: ReportLayout, left_logo, right_logo):
    _draw_logo(cur, left_logo, MARGIN, 3, 65, 24)
    _draw_logo(cur, right_logo, PAGE_WIDTH - MARGIN - 50, 5, 50, 18)

    cur.c.setFillColor(colors.black)
    cur.font(20, bold=True)
    cur.text(PAGE_WIDTH / 2, 30, layout.title, align="center")
    cur.y = 34


def _draw_project_info(cur: _PageCursor, layout: ReportLayout):
    info = layout.info
    cur.font(10, bold=True)
    cur.text(MARGIN, cur.y, info.project_line)
    cur.y += 6
    cur.text(MARGIN, cur.y, info.weather_line)
    cur.y += 6
    cur.text(MARGIN, cur.y, info.temperature_line)
    if info.date_text:
        cur.font(10)
        cur.text(PAGE_WIDTH - MARGIN, cur.y, info.date_text, align="right")
    cur.y += 10


def _draw_panels(cur: _PageCursor, panels: TextPanels):
    col_width = (CONTENT_WIDTH - PANEL_GAP * 2) / 2
    right_x = MARGIN + col_width + PANEL_GAP
    content_height = panels.row_count * PANEL_LINE_HEIGHT + 4
    cur.ensure_room(8 + content_height + 8)

    cur.font(11, bold=True)
    cur.rect(MARGIN, cur.y - 4, col_width, 6, fill=BLUE)
    cur.rect(right_x, cur.y - 4, col_width, 6, fill=BLUE)
    cur.c.setFillColor(colors.white)
    cur.text(MARGIN + 2, cur.y, panels.left_title)
    cur.text(right_x + 2, cur.y, panels.right_title)
    cur.c.setFillColor(colors.black)
    cur.y += 8

    cur.font(10)
    cur.rect(MARGIN, cur.y - 4, col_width, content_height, stroke=colors.black)
    cur.rect(right_x, cur.y - 4, col_width, content_height, stroke=colors.black)
    for i, (left, right) in enumerate(zip(panels.left_lines, panels.right_lines)):
        line_y = cur.y + i * PANEL_LINE_HEIGHT
        cur.text(MARGIN + 2, line_y, left)
        cur.text(right_x + 2, line_y, right)
    cur.y += content_height + 8


def _row_cells(row, has_unit: bool) -> Sequence[str]:
    if row is None:
        return []
    limit = 20 if has_unit else 30
    cells = [row.description[:limit] or "-"]
    if has_unit:
        cells.append(row.unit or "-")
    cells += [format_number(row.prev), format_number(row.today), format_number(row.accumulated)]
    return cells


def _total_cells(totals, has_unit: bool) -> Sequence[str]:
    cells = [settings.TOTAL_LABEL]
    if has_unit:
        cells.append("")
    cells += [format_number(totals.total_prev), format_number(totals.total_today),
              format_number(totals.total_accumulated)]
    return cells


def _draw_cells(cur: _PageCursor, x: float, widths: Sequence[int], cells: Sequence[str], padding: float):
    for width, value in zip(widths, cells):
        cur.text(x + padding, cur.y, value)
        x += width


def _draw_column_headers(cur: _PageCursor, pair: ResourceTablePair, xs, table_width, widths):
    cur.font(9, bold=True)
    for x in xs:
        cur.rect(x, cur.y - 3, table_width, 5, fill=TINT)
    cur.c.setFillColor(colors.black)
    for x in xs:
        _draw_cells(cur, x, widths, pair.columns, CELL_PADDING)
    cur.y += 6
    cur.font(9)


def _draw_table_pair(cur: _PageCursor, pair: ResourceTablePair):
    table_width = (CONTENT_WIDTH - TABLE_GAP) / 2
    xs = (MARGIN, MARGIN + table_width + TABLE_GAP)
    widths = UNIT_COLUMNS if pair.has_unit else PLAIN_COLUMNS

    # Titles, column headers and the first body row stay together
    head_height = (8 if pair.group_title else 0) + 7 + 6 + ROW_HEIGHT
    cur.ensure_room(head_height)

    if pair.group_title:
        cur.font(11, bold=True)
        cur.rect(MARGIN, cur.y - 4, CONTENT_WIDTH, 6, fill=BLUE)
        cur.c.setFillColor(colors.white)
        cur.text(MARGIN + CONTENT_WIDTH / 2, cur.y, pair.group_title, align="center")
        cur.y += 8

    cur.font(10, bold=True)
    for x in xs:
        cur.rect(x, cur.y - 4, table_width, 6, fill=BLUE)
    cur.c.setFillColor(colors.white)
    cur.text(xs[0] + 2, cur.y, pair.left.title)
    cur.text(xs[1] + 2, cur.y, pair.right.title)
    cur.c.setFillColor(colors.black)
    cur.y += 7

    _draw_column_headers(cur, pair, xs, table_width, widths)

    for i in range(pair.row_count):
        if cur.ensure_room(ROW_HEIGHT):
            _draw_column_headers(cur, pair, xs, table_width, widths)
        top = cur.y - 3
        for x in xs:
            if i % 2 == 0:
                cur.rect(x, top, table_width, ROW_HEIGHT, fill=STRIPE)
            cur.c.setStrokeColor(GRID)
            cur.rect(x, top, table_width, ROW_HEIGHT, stroke=GRID)
            col_x = x
            for width in widths[:-1]:
                col_x += width
                cur.vline(col_x, top, top + ROW_HEIGHT)
        cur.c.setFillColor(colors.black)
        _draw_cells(cur, xs[0], widths, _row_cells(pair.left.row(i), pair.has_unit), CELL_PADDING)
        _draw_cells(cur, xs[1], widths, _row_cells(pair.right.row(i), pair.has_unit), CELL_PADDING)
        cur.y += ROW_HEIGHT

    cur.ensure_room(ROW_HEIGHT)
    cur.font(9, bold=True)
    for x in xs:
        cur.rect(x, cur.y - 3, table_width, ROW_HEIGHT, fill=TINT, stroke=colors.black)
    cur.c.setFillColor(colors.black)
    _draw_cells(cur, xs[0], widths, _total_cells(pair.left.totals, pair.has_unit), CELL_PADDING)
    _draw_cells(cur, xs[1], widths, _total_cells(pair.right.totals, pair.has_unit), CELL_PADDING)
    cur.y += 10


def render_pdf(layout: ReportLayout, left_logo=None, right_logo=None,
               generated_on: Optional[datetime] = None) -> bytes:
    """Draw ``layout`` onto A4 pages and return the PDF bytes."""
    bio = BytesIO()
    c = canvas.Canvas(bio, pagesize=A4)
    c.setTitle(f"{layout.title} - {layout.info.project_name}".strip(" -"))
    stamp = (generated_on or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    cur = _PageCursor(c, stamp)

    _draw_header(cur, layout, left_logo, right_logo)
    _draw_project_info(cur, layout)
    _draw_panels(cur, layout.panels)
    for pair in layout.pairs:
        _draw_table_pair(cur, pair)

    cur.footer()
    c.save()
    logger.debug(f"PDF drawn on {cur.pages} page(s)")
    return bio.getvalue()


def generate_pdf_report(report: ReportData, file_name: Optional[str] = None,
                        left_logo=paths.LEFT_LOGO, right_logo=paths.RIGHT_LOGO) -> RenderedDocument:
    """Generate the freeform PDF report."""
    logger.info(f"Generating PDF report for '{report.project_name}'")
    try:
        data = render_pdf(build_layout(report), left_logo, right_logo)
    except Exception as e:
        logger.exception("PDF generation failed")
        raise ReportRenderError(f"Could not generate the PDF report: {e}", fmt="pdf") from e
    name = FileUtils.resolve_file_name(file_name, report_file_name(report, "pdf"))
    logger.info(f"PDF report ready: {name}")
    return RenderedDocument(name, data)


class PdfPreview:
    """A PDF written to a temporary file for inline display.

    The caller owns the file: call ``release()`` (or use the preview as a
    context manager) once it is no longer shown.
    """

    def __init__(self, document: RenderedDocument):
        self.document = document
        fd, name = tempfile.mkstemp(suffix=".pdf", prefix="daily_report_")
        with os.fdopen(fd, "wb") as f:
            f.write(document.data)
        self.path: Optional[Path] = Path(name)

    @property
    def uri(self) -> str:
        if self.path is None:
            raise ValueError("Preview has been released")
        return self.path.as_uri()

    @property
    def released(self) -> bool:
        return self.path is None

    def release(self):
        """Delete the temporary file; releasing twice is a no-op."""
        if self.path is None:
            return
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        self.path = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()


def open_pdf_preview(report: ReportData, **kwargs) -> PdfPreview:
    """Render the PDF and expose it through a releasable temporary file."""
    return PdfPreview(generate_pdf_report(report, **kwargs))
