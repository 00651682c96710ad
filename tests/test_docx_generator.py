from io import BytesIO

import pytest
from docx import Document

from daily_report.config import settings
from daily_report.models import ReportData
from daily_report.reports import ReportRenderError, generate_docx_report
from daily_report.reports.layout import build_layout

from conftest import make_rows


def _document(report):
    rendered = generate_docx_report(report)
    return rendered, Document(BytesIO(rendered.data))


def test_title_and_info_paragraphs_match_layout(report):
    rendered, doc = _document(report)
    info = build_layout(report).info
    assert rendered.file_name.endswith(".docx")
    texts = [p.text for p in doc.paragraphs]
    assert texts[0] == settings.REPORT_TITLE
    assert texts[1] == info.project_line
    assert texts[2] == info.weather_line
    assert texts[3].startswith(info.temperature_line)
    assert texts[3].endswith("Date: 2026-10-18")


def test_panel_grid(report):
    _, doc = _document(report)
    panels = doc.tables[0]
    assert len(panels.rows) == 1 + settings.PANEL_ROWS
    assert len(panels.columns) == 2
    assert panels.cell(0, 0).text == settings.ACTIVITY_TITLE
    assert panels.cell(1, 1).text == "Cure slab B."
    assert panels.cell(10, 1).text == ""


def test_team_table_structure(report):
    _, doc = _document(report)
    team = doc.tables[1]
    # group, sub-header, column header, 6 body rows, total
    assert len(team.rows) == 3 + settings.TEAM_MIN_ROWS + 1
    assert len(team.columns) == 8
    assert team.cell(0, 0).text == settings.TEAM_GROUP_TITLE
    assert team.cell(1, 0).text == settings.MANAGEMENT_TITLE
    assert team.cell(1, 4).text == settings.WORKING_TITLE
    assert [c.text for c in team.rows[2].cells] == ["Description", "Prev", "Today", "Accum"] * 2
    assert [c.text for c in team.rows[3].cells[:4]] == ["Engineer 1", "1", "2", "3"]
    assert [c.text for c in team.rows[5].cells[:4]] == ["", "", "", ""]
    assert [c.text for c in team.rows[-1].cells] == ["TOTAL", "2", "4", "6", "TOTAL", "4", "8", "12"]


def test_materials_table_structure(report):
    _, doc = _document(report)
    materials = doc.tables[2]
    assert len(materials.rows) == 4
    assert len(materials.columns) == 10
    assert materials.cell(0, 0).text == settings.MATERIALS_TITLE
    assert [c.text for c in materials.rows[2].cells[5:]] == ["Excavator", "unit", "1", "1", "2"]
    assert materials.rows[3].cells[0].paragraphs[0].runs[0].bold


def test_long_pair_renders_every_row():
    report = ReportData.model_validate({"managementTeam": make_rows(8), "workingTeam": make_rows(3)})
    _, doc = _document(report)
    assert len(doc.tables[1].rows) == 3 + 8 + 1


def test_failure_is_wrapped(report, monkeypatch):
    def boom(layout):
        raise ValueError("pack failed")

    monkeypatch.setattr("daily_report.reports.docx_generator.build_docx", boom)
    with pytest.raises(ReportRenderError) as excinfo:
        generate_docx_report(report)
    assert excinfo.value.fmt == "docx"
