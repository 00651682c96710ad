"""The fixed spreadsheet template: anchor manifest, loading and validation.

Every address the overlay writes to is declared once in ``TemplateAnchors``
and checked against the workbook when it is loaded, so an edited template
fails loudly instead of producing a shifted report.
"""

import logging
import zipfile
from copy import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import MergedCell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from ..config import settings
from .errors import TemplateError

logger = logging.getLogger(__name__)

LEFT_COLUMNS = ("B", "C", "D", "E", "F")
RIGHT_COLUMNS = ("G", "H", "I", "J", "K")


@dataclass(frozen=True)
class TableBlock:
    """A pre-sized side-by-side table pair: data rows followed by a TOTAL row.

    Columns per side are description, unit, prev, today, accum. Without a
    unit column the description spans the first two columns.
    """

    first_row: int
    rows: int
    has_unit: bool

    @property
    def total_row(self) -> int:
        return self.first_row + self.rows

    @property
    def sides(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        return LEFT_COLUMNS, RIGHT_COLUMNS

    def description_merges(self, row: int) -> Tuple[str, ...]:
        if self.has_unit:
            return ()
        return tuple(f"{cols[0]}{row}:{cols[1]}{row}" for cols in self.sides)


@dataclass(frozen=True)
class TemplateAnchors:
    sheet_name: str = "REPORT"
    title_cell: str = "B4"
    project_cell: str = "B7"
    weather_cell: str = "B8"
    temperature_cell: str = "B9"
    date_cell: str = "I9"
    panel_header_row: int = 11
    panel_first_row: int = 12
    panel_rows: int = settings.PANEL_ROWS
    panel_left_column: str = "B"
    panel_right_column: str = "G"
    team_group_row: int = 22
    team: TableBlock = field(default_factory=lambda: TableBlock(25, 6, has_unit=False))
    materials: TableBlock = field(default_factory=lambda: TableBlock(34, 1, has_unit=True))
    left_logo_cell: str = "A1"
    right_logo_cell: str = "H1"

    @property
    def blocks(self) -> Tuple[TableBlock, TableBlock]:
        return self.team, self.materials


DEFAULT_ANCHORS = TemplateAnchors()


class RowStyle:
    """Snapshot of one template row's cell styles, keyed by column letter."""

    def __init__(self, styles: Dict[str, object], height=None):
        self.styles = styles
        self.height = height

    @classmethod
    def capture(cls, ws: Worksheet, row: int, columns) -> "RowStyle":
        styles = {}
        for col in columns:
            cell = ws[f"{col}{row}"]
            if not isinstance(cell, MergedCell):
                styles[col] = copy(cell._style)
        return cls(styles, ws.row_dimensions[row].height)

    def apply(self, ws: Worksheet, row: int):
        for col, style in self.styles.items():
            cell = ws[f"{col}{row}"]
            if isinstance(cell, MergedCell):
                continue
            cell._style = copy(style)
        if self.height is not None:
            ws.row_dimensions[row].height = self.height


def _label(ws: Worksheet, address: str) -> str:
    value = ws[address].value
    return str(value).strip().upper() if value is not None else ""


def validate_template(ws: Worksheet, anchors: TemplateAnchors = DEFAULT_ANCHORS):
    """Check the worksheet still has the layout the anchors describe."""
    last_row = max(block.total_row for block in anchors.blocks)
    if ws.max_row < last_row:
        raise TemplateError(
            f"Template sheet too small: '{ws.title}' ends at row {ws.max_row}, anchors need row {last_row}"
        )
    for block in anchors.blocks:
        for cols in block.sides:
            address = f"{cols[0]}{block.total_row}"
            if _label(ws, address) != settings.TOTAL_LABEL:
                raise TemplateError(
                    f"Template anchor mismatch: expected '{settings.TOTAL_LABEL}' in {address}"
                )
    for address in (anchors.project_cell, anchors.weather_cell, anchors.temperature_cell, anchors.date_cell):
        if isinstance(ws[address], MergedCell):
            raise TemplateError(f"Template anchor {address} is inside a merged range")


def load_template(path, anchors: TemplateAnchors = DEFAULT_ANCHORS) -> Tuple[Workbook, Worksheet]:
    """Open the template as an editable workbook and return it with its report sheet."""
    path = Path(path)
    try:
        wb = load_workbook(path)
    except FileNotFoundError as e:
        raise TemplateError(f"Unable to load Excel template: {path} not found") from e
    except (OSError, zipfile.BadZipFile, InvalidFileException, KeyError, ValueError) as e:
        raise TemplateError(f"Unable to load Excel template {path}: {e}") from e

    ws = wb[anchors.sheet_name] if anchors.sheet_name in wb.sheetnames else wb.worksheets[0]
    validate_template(ws, anchors)
    logger.debug(f"Loaded template {path.name}, sheet '{ws.title}'")
    return wb, ws


# --- blank template -------------------------------------------------------

_THIN = Side(style="thin", color="FF000000")
_BOX = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_BLUE = PatternFill("solid", fgColor=f"FF{settings.BRAND_BLUE}")
_TINT = PatternFill("solid", fgColor=f"FF{settings.HEADER_TINT}")
_WHITE_BOLD = Font(bold=True, color="FFFFFFFF")
_BOLD = Font(bold=True)
_CENTER = Alignment(horizontal="center", vertical="center")


def _fill_range(ws: Worksheet, row: int, columns, *, fill=None, font=None, border=None,
                alignment=None, number_format=None):
    for col in columns:
        cell = ws[f"{col}{row}"]
        if fill is not None:
            cell.fill = fill
        if font is not None:
            cell.font = font
        if border is not None:
            cell.border = border
        if alignment is not None:
            cell.alignment = alignment
        if number_format is not None:
            cell.number_format = number_format


def _write_block(ws: Worksheet, block: TableBlock, titles: Tuple[str, str]):
    header_row = block.first_row - 1
    sub_row = block.first_row - 2
    for cols, title in zip(block.sides, titles):
        ws[f"{cols[0]}{sub_row}"] = title
        _fill_range(ws, sub_row, cols, fill=_BLUE, font=_WHITE_BOLD)
        ws.merge_cells(f"{cols[0]}{sub_row}:{cols[-1]}{sub_row}")

        labels = (["Description", "Unit", "Prev", "Today", "Accum"] if block.has_unit
                  else ["Description", None, "Prev", "Today", "Accum"])
        for col, label in zip(cols, labels):
            if label is not None:
                ws[f"{col}{header_row}"] = label
        _fill_range(ws, header_row, cols, fill=_TINT, font=_BOLD, border=_BOX, alignment=_CENTER)

        for row in range(block.first_row, block.total_row + 1):
            _fill_range(ws, row, cols[:2], border=_BOX)
            _fill_range(ws, row, cols[2:], border=_BOX, alignment=_CENTER)
        ws[f"{cols[0]}{block.total_row}"] = settings.TOTAL_LABEL
        _fill_range(ws, block.total_row, cols, fill=_TINT, font=_BOLD)

        for row in range(block.first_row, block.total_row):
            ws[f"{cols[4]}{row}"] = f"=SUM({cols[2]}{row}:{cols[3]}{row})"
        for col in cols[2:]:
            ws[f"{col}{block.total_row}"] = f"=SUM({col}{block.first_row}:{col}{block.total_row - 1})"

    for row in [header_row] + list(range(block.first_row, block.total_row + 1)):
        for rng in block.description_merges(row):
            ws.merge_cells(rng)


def build_blank_template(anchors: TemplateAnchors = DEFAULT_ANCHORS) -> Workbook:
    """Create a workbook with exactly the layout ``anchors`` describes."""
    wb = Workbook()
    ws = wb.active
    ws.title = anchors.sheet_name

    ws.column_dimensions["A"].width = 3
    for col, width in zip(LEFT_COLUMNS + RIGHT_COLUMNS, (22, 10, 9, 9, 9) * 2):
        ws.column_dimensions[col].width = width

    ws[anchors.title_cell] = settings.REPORT_TITLE
    ws[anchors.title_cell].font = Font(bold=True, size=20)
    ws[anchors.title_cell].alignment = _CENTER
    title_row = ws[anchors.title_cell].row
    ws.merge_cells(f"B{title_row}:K{title_row}")

    for address in (anchors.project_cell, anchors.weather_cell, anchors.temperature_cell):
        ws[address].font = _BOLD
    ws[anchors.date_cell].number_format = settings.DATE_FORMAT

    header = anchors.panel_header_row
    for cols, title in ((LEFT_COLUMNS, settings.ACTIVITY_TITLE), (RIGHT_COLUMNS, settings.PLAN_TITLE)):
        ws[f"{cols[0]}{header}"] = title
        _fill_range(ws, header, cols, fill=_BLUE, font=_WHITE_BOLD, alignment=_CENTER)
        ws.merge_cells(f"{cols[0]}{header}:{cols[-1]}{header}")
        for row in range(anchors.panel_first_row, anchors.panel_first_row + anchors.panel_rows):
            _fill_range(ws, row, cols, border=Border(left=_THIN, right=_THIN),
                        alignment=Alignment(vertical="top", wrap_text=True))
            ws.merge_cells(f"{cols[0]}{row}:{cols[-1]}{row}")

    group = anchors.team_group_row
    ws[f"B{group}"] = settings.TEAM_GROUP_TITLE
    _fill_range(ws, group, LEFT_COLUMNS + RIGHT_COLUMNS, fill=_BLUE, font=_WHITE_BOLD, alignment=_CENTER)
    ws.merge_cells(f"B{group}:K{group}")

    _write_block(ws, anchors.team, (settings.MANAGEMENT_TITLE, settings.WORKING_TITLE))
    _write_block(ws, anchors.materials, (settings.MATERIALS_TITLE, settings.MACHINERY_TITLE))
    return wb
