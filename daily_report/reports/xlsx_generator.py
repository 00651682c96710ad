"""XLSX report generator: overlays report data onto the fixed template."""

import logging
from copy import copy
from io import BytesIO
from typing import Optional, Sequence, Tuple

from openpyxl.drawing.image import Image as XLImage
from openpyxl.worksheet.worksheet import Worksheet

from ..config import paths, settings
from ..models.document import RenderedDocument
from ..models.report import ReportData
from ..utils.file_utils import FileUtils
from .errors import ReportRenderError, TemplateError
from .layout import ReportLayout, ResourceTablePair, build_layout, report_file_name
from .xlsx_template import DEFAULT_ANCHORS, RowStyle, TableBlock, TemplateAnchors, load_template

logger = logging.getLogger(__name__)

LOGO_HEIGHT_PX = 60


def insert_rows(ws: Worksheet, idx: int, amount: int):
    """Insert ``amount`` rows before ``idx``, carrying merges and row heights along.

    ``Worksheet.insert_rows`` only moves cell contents, so merged ranges and
    row heights at or below ``idx`` are shifted here.
    """
    if amount <= 0:
        return
    moved = []
    for rng in list(ws.merged_cells.ranges):
        if rng.min_row >= idx:
            moved.append((rng.min_row, rng.min_col, rng.max_row, rng.max_col))
            ws.unmerge_cells(str(rng))

    heights = {r: dim.height for r, dim in ws.row_dimensions.items()
               if r >= idx and dim.height is not None}

    ws.insert_rows(idx, amount)

    for r in heights:
        ws.row_dimensions[r].height = None
    for r, height in heights.items():
        ws.row_dimensions[r + amount].height = height
    for min_row, min_col, max_row, max_col in moved:
        ws.merge_cells(start_row=min_row + amount, start_column=min_col,
                       end_row=max_row + amount, end_column=max_col)


def merge_if_needed(ws: Worksheet, rng: str):
    if rng not in {str(r) for r in ws.merged_cells.ranges}:
        ws.merge_cells(rng)


class TemplateOverlay:
    """Writes one report into a loaded template worksheet.

    ``offset`` tracks how many rows earlier blocks inserted, so anchors of
    later blocks can be shifted to their current position.
    """

    def __init__(self, ws: Worksheet, anchors: TemplateAnchors = DEFAULT_ANCHORS):
        self.ws = ws
        self.anchors = anchors
        self.offset = 0

    def write_info(self, layout: ReportLayout, report: ReportData):
        ws, a = self.ws, self.anchors
        ws[a.project_cell] = layout.info.project_line
        ws[a.weather_cell] = layout.info.weather_line
        ws[a.temperature_cell] = layout.info.temperature_line

        date_cell = ws[a.date_cell]
        date_cell.value = report.report_date
        if not date_cell.number_format or date_cell.number_format == "General":
            date_cell.number_format = settings.DATE_FORMAT

    def write_panels(self, layout: ReportLayout):
        ws, a = self.ws, self.anchors
        columns = (a.panel_left_column, a.panel_right_column)
        base = RowStyle.capture(ws, a.panel_first_row, columns)
        panels = layout.panels
        for i in range(a.panel_rows):
            row = a.panel_first_row + i
            base.apply(ws, row)
            for col, lines in zip(columns, (panels.left_lines, panels.right_lines)):
                cell = ws[f"{col}{row}"]
                alignment = copy(cell.alignment)
                alignment.wrap_text = True
                cell.alignment = alignment
                cell.value = lines[i] if i < len(lines) else ""

    def write_pair(self, block: TableBlock, pair: ResourceTablePair) -> Tuple[int, int]:
        """Fill one table block; returns its (first data row, TOTAL row)."""
        ws = self.ws
        left_cols, right_cols = block.sides
        first = block.first_row + self.offset
        row_count = max(pair.row_count, block.rows)

        style = RowStyle.capture(ws, first, left_cols + right_cols)
        extra = row_count - block.rows
        if extra > 0:
            insert_rows(ws, first + block.rows, extra)
            self.offset += extra
            logger.debug(f"Inserted {extra} row(s) at {first + block.rows}")

        total_row = first + row_count
        for i in range(row_count):
            row = first + i
            style.apply(ws, row)
            for rng in block.description_merges(row):
                merge_if_needed(ws, rng)
            self._write_row(row, left_cols, pair.left.row(i), block.has_unit)
            self._write_row(row, right_cols, pair.right.row(i), block.has_unit)

        for rng in block.description_merges(total_row):
            merge_if_needed(ws, rng)
        for cols in (left_cols, right_cols):
            ws[f"{cols[0]}{total_row}"] = settings.TOTAL_LABEL
            for col in cols[2:]:
                ws[f"{col}{total_row}"] = f"=SUM({col}{first}:{col}{total_row - 1})"
        return first, total_row

    def _write_row(self, row: int, cols: Sequence[str], data, has_unit: bool):
        desc, unit, prev, today, accum = (f"{c}{row}" for c in cols)
        ws = self.ws
        if data is None:
            ws[desc] = None
            if has_unit:
                ws[unit] = None
            for address in (prev, today, accum):
                ws[address] = None
            return
        ws[desc] = data.description or None
        if has_unit:
            ws[unit] = data.unit or None
        ws[prev] = data.prev
        ws[today] = data.today
        ws[accum] = f"=SUM({prev}:{today})"

    def add_logo(self, path, anchor: str):
        logo = FileUtils.load_logo_bytes(path)
        if not logo:
            return
        try:
            img = XLImage(BytesIO(logo))
            if img.height:
                scale = LOGO_HEIGHT_PX / img.height
                img.width, img.height = img.width * scale, LOGO_HEIGHT_PX
            img.anchor = anchor
            self.ws.add_image(img)
        except Exception as e:
            logger.warning(f"Failed to add logo {path} to workbook: {e}")


def generate_xlsx_report(report: ReportData, file_name: Optional[str] = None,
                         template_path=None, anchors: TemplateAnchors = DEFAULT_ANCHORS,
                         left_logo=paths.LEFT_LOGO, right_logo=paths.RIGHT_LOGO) -> RenderedDocument:
    """Generate the spreadsheet report from the fixed template."""
    template_path = template_path or paths.TEMPLATE_XLSX
    logger.info(f"Generating XLSX report for '{report.project_name}' from {template_path}")
    wb, ws = load_template(template_path, anchors)
    try:
        layout = build_layout(report)
        overlay = TemplateOverlay(ws, anchors)
        overlay.add_logo(left_logo, anchors.left_logo_cell)
        overlay.add_logo(right_logo, anchors.right_logo_cell)
        overlay.write_info(layout, report)
        overlay.write_panels(layout)
        for block, pair in zip(anchors.blocks, layout.pairs):
            overlay.write_pair(block, pair)

        bio = BytesIO()
        wb.save(bio)
    except TemplateError:
        raise
    except Exception as e:
        logger.exception("XLSX generation failed")
        raise ReportRenderError(f"Could not generate the Excel report: {e}", fmt="xlsx") from e
    name = FileUtils.resolve_file_name(file_name, report_file_name(report, "xlsx"))
    logger.info(f"XLSX report ready: {name}")
    return RenderedDocument(name, bio.getvalue())
