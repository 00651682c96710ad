"""DOCX report generator using python-docx."""

import logging
from io import BytesIO
from typing import Optional, Sequence

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt, RGBColor

from ..config import settings
from ..models.document import RenderedDocument
from ..models.report import ReportData
from ..utils.calculations import format_number
from ..utils.file_utils import FileUtils
from .errors import ReportRenderError
from .layout import ReportLayout, ResourceTablePair, TextPanels, build_layout, report_file_name

logger = logging.getLogger(__name__)

WHITE = RGBColor(0xFF, 0xFF, 0xFF)


def shade_cell(cell, fill: str):
    """Set the background colour of a table cell."""
    tc_pr = cell._tc.get_or_add_tcPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    tc_pr.append(shd)


def remove_paragraph_spacing(paragraph):
    """Remove spacing before and after paragraph."""
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(0)


def set_cell_text(cell, text: str, bold: bool = False, color: Optional[RGBColor] = None,
                  align=WD_ALIGN_PARAGRAPH.LEFT, size: int = 9):
    p = cell.paragraphs[0]
    p.alignment = align
    remove_paragraph_spacing(p)
    run = p.add_run(text or "")
    run.bold = bold
    run.font.size = Pt(size)
    if color is not None:
        run.font.color.rgb = color


def _add_info(doc, layout: ReportLayout):
    info = layout.info
    p = doc.add_paragraph()
    p.add_run(info.project_label).bold = True
    p.add_run(info.project_name)

    p = doc.add_paragraph()
    p.add_run("Weather          : AM ").bold = True
    p.add_run(info.weather_am)
    p.add_run("  |  PM ").bold = True
    p.add_run(info.weather_pm)

    p = doc.add_paragraph()
    p.add_run("Temperature  : AM ").bold = True
    p.add_run(info.temp_am)
    p.add_run("    |  PM ").bold = True
    p.add_run(info.temp_pm)
    p.add_run(f"{' ' * 40}Date: {info.date_text}")
    p.paragraph_format.space_after = Pt(12)


def _add_panels(doc, panels: TextPanels):
    table = doc.add_table(rows=1, cols=2)
    table.style = "Table Grid"
    table.alignment = WD_TABLE_ALIGNMENT.CENTER
    for cell, title in zip(table.rows[0].cells, (panels.left_title, panels.right_title)):
        set_cell_text(cell, title, bold=True, color=WHITE, align=WD_ALIGN_PARAGRAPH.CENTER, size=10)
        shade_cell(cell, settings.BRAND_BLUE)

    for i, (left, right) in enumerate(zip(panels.left_lines, panels.right_lines)):
        cells = table.add_row().cells
        for cell, text in zip(cells, (left, right)):
            set_cell_text(cell, text, size=10)
            if i % 2 == 0:
                shade_cell(cell, settings.STRIPE)
    return table


def _side_cells(row, has_unit: bool) -> Sequence[str]:
    if row is None:
        return [""] * (5 if has_unit else 4)
    cells = [row.description]
    if has_unit:
        cells.append(row.unit)
    cells += [format_number(row.prev), format_number(row.today), format_number(row.accumulated)]
    return cells


def _total_side(totals, has_unit: bool) -> Sequence[str]:
    cells = [settings.TOTAL_LABEL]
    if has_unit:
        cells.append("")
    cells += [format_number(totals.total_prev), format_number(totals.total_today),
              format_number(totals.total_accumulated)]
    return cells


def _add_table_pair(doc, pair: ResourceTablePair):
    width = len(pair.columns)
    table = doc.add_table(rows=0, cols=width * 2)
    table.style = "Table Grid"
    table.alignment = WD_TABLE_ALIGNMENT.CENTER

    if pair.group_title:
        cells = table.add_row().cells
        merged = cells[0].merge(cells[-1])
        set_cell_text(merged, pair.group_title, bold=True, color=WHITE, align=WD_ALIGN_PARAGRAPH.CENTER, size=10)
        shade_cell(merged, settings.BRAND_BLUE)

    cells = table.add_row().cells
    for start, title in ((0, pair.left.title), (width, pair.right.title)):
        merged = cells[start].merge(cells[start + width - 1])
        set_cell_text(merged, title, bold=True, color=WHITE, size=10)
        shade_cell(merged, settings.BRAND_BLUE)

    cells = table.add_row().cells
    for i, label in enumerate(pair.columns * 2):
        align = WD_ALIGN_PARAGRAPH.LEFT if label == "Description" else WD_ALIGN_PARAGRAPH.CENTER
        set_cell_text(cells[i], label, bold=True, align=align)
        shade_cell(cells[i], settings.HEADER_TINT)

    for i in range(pair.row_count):
        values = list(_side_cells(pair.left.row(i), pair.has_unit)) + \
            list(_side_cells(pair.right.row(i), pair.has_unit))
        cells = table.add_row().cells
        for j, value in enumerate(values):
            align = WD_ALIGN_PARAGRAPH.LEFT if j % width == 0 else WD_ALIGN_PARAGRAPH.CENTER
            set_cell_text(cells[j], value, align=align)
            if i % 2 == 0:
                shade_cell(cells[j], settings.STRIPE)

    values = list(_total_side(pair.left.totals, pair.has_unit)) + \
        list(_total_side(pair.right.totals, pair.has_unit))
    cells = table.add_row().cells
    for j, value in enumerate(values):
        align = WD_ALIGN_PARAGRAPH.LEFT if j % width == 0 else WD_ALIGN_PARAGRAPH.CENTER
        set_cell_text(cells[j], value, bold=True, align=align)
    return table


def build_docx(layout: ReportLayout):
    """Build the word-processing document for ``layout``."""
    doc = Document()
    section = doc.sections[0]
    section.left_margin = section.right_margin = Cm(1.5)
    section.top_margin = section.bottom_margin = Cm(1.5)

    title = doc.add_paragraph(layout.title, style="Title")
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    _add_info(doc, layout)
    _add_panels(doc, layout.panels)
    for pair in layout.pairs:
        doc.add_paragraph().paragraph_format.space_after = Pt(12)
        _add_table_pair(doc, pair)
    return doc


def generate_docx_report(report: ReportData, file_name: Optional[str] = None) -> RenderedDocument:
    """Generate DOCX report."""
    logger.info(f"Generating DOCX report for '{report.project_name}'")
    try:
        doc = build_docx(build_layout(report))
        bio = BytesIO()
        doc.save(bio)
    except Exception as e:
        logger.exception("DOCX generation failed")
        raise ReportRenderError(f"Could not generate the Word report: {e}", fmt="docx") from e
    name = FileUtils.resolve_file_name(file_name, report_file_name(report, "docx"))
    logger.info(f"DOCX report ready: {name}")
    return RenderedDocument(name, bio.getvalue())
