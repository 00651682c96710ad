import re
from datetime import datetime
from io import BytesIO

import pytest
from openpyxl import load_workbook

from daily_report.config import settings
from daily_report.models import ReportData
from daily_report.reports import ReportRenderError, TemplateError, build_blank_template, generate_xlsx_report
from daily_report.utils.calculations import row_accumulated

from conftest import make_rows


def _sheet(document):
    return load_workbook(BytesIO(document.data))["REPORT"]


def _merged(ws):
    return {str(r) for r in ws.merged_cells.ranges}


def test_scalar_anchors(report, template_path):
    document = generate_xlsx_report(report, template_path=template_path)
    assert document.file_name == "Daily_Report_Site_A_Phase_2_October_18_2026.xlsx"
    ws = _sheet(document)
    assert ws["B7"].value == "Project Name : Site A - Phase 2"
    assert ws["B8"].value == "Weather          : AM Sunny  |  PM Cloudy"
    assert ws["B9"].value == "Temperature  : AM 24°C    |  PM 29°C"
    assert ws["I9"].value == datetime(2026, 10, 18)


def test_date_format_assigned_when_missing(report, tmp_path):
    wb = build_blank_template()
    wb["REPORT"]["I9"].number_format = "General"
    path = tmp_path / "general.xlsx"
    wb.save(path)
    ws = _sheet(generate_xlsx_report(report, template_path=path))
    assert ws["I9"].number_format == settings.DATE_FORMAT


def test_panels_written_with_template_style(report, template_path):
    ws = _sheet(generate_xlsx_report(report, template_path=template_path))
    assert ws["B12"].value.startswith("Poured concrete")
    assert ws["G12"].value == "Cure slab B."
    assert ws["G13"].value == "Start formwork on level 4."
    for row in range(12, 22):
        assert ws[f"B{row}"].style_id == ws["B12"].style_id
        assert ws[f"B{row}"].border.left.style == "thin"
        assert ws[f"G{row}"].alignment.wrap_text


def test_team_block_within_allotment(report, template_path):
    ws = _sheet(generate_xlsx_report(report, template_path=template_path))
    assert ws["B25"].value == "Engineer 1"
    assert ws["D25"].value == 1
    assert ws["F25"].value == "=SUM(D25:E25)"
    assert ws["B27"].value is None
    assert ws["G28"].value == "Mason 4"
    assert ws["B31"].value == "TOTAL"
    assert ws["D31"].value == "=SUM(D25:D30)"
    assert ws["K31"].value == "=SUM(K25:K30)"
    assert ws["B34"].value == "Cement"
    assert ws["C34"].value == "bag"
    assert ws["B35"].value == "TOTAL"


def test_material_rows_inserted_below_template_block(tmp_path, template_path):
    report = ReportData.model_validate({"materials": make_rows(12, "Material", unit="m3")})
    ws = _sheet(generate_xlsx_report(report, template_path=template_path))

    assert [ws[f"B{r}"].value for r in (34, 45)] == ["Material 1", "Material 12"]
    assert ws["B46"].value == "TOTAL"
    assert ws["G46"].value == "TOTAL"
    assert ws["D46"].value == "=SUM(D34:D45)"
    assert ws["F46"].value == "=SUM(F34:F45)"
    assert ws["I46"].value == "=SUM(I34:I45)"
    assert ws["F45"].value == "=SUM(D45:E45)"
    assert ws["G45"].value is None


def test_inserted_rows_clone_template_row_style(template_path):
    report = ReportData.model_validate({"materials": make_rows(5, "Material")})
    ws = _sheet(generate_xlsx_report(report, template_path=template_path))
    for row in range(35, 39):
        for col in "BCDEFGHIJK":
            cell, source = ws[f"{col}{row}"], ws[f"{col}34"]
            assert cell.style_id == source.style_id
            assert cell.border.left.style == source.border.left.style == "thin"
            assert cell.alignment.horizontal == source.alignment.horizontal


def test_team_insertion_shifts_merges_and_later_blocks(template_path):
    report = ReportData.model_validate({
        "managementTeam": make_rows(8, "Engineer"),
        "workingTeam": make_rows(3, "Mason"),
        "materials": make_rows(1, "Cement", unit="bag"),
    })
    ws = _sheet(generate_xlsx_report(report, template_path=template_path))
    merged = _merged(ws)

    for row in range(25, 34):
        assert f"B{row}:C{row}" in merged
        assert f"G{row}:H{row}" in merged
    assert ws["B33"].value == "TOTAL"
    assert ws["D33"].value == "=SUM(D25:D32)"
    assert ws["G32"].value is None

    # materials block moved down by the two inserted rows
    assert "B34:F34" in merged
    assert ws["B35"].value == "Description"
    assert ws["B36"].value == "Cement 1"
    assert ws["B37"].value == "TOTAL"
    assert ws["D37"].value == "=SUM(D36:D36)"


def test_accumulated_formula_matches_row_value(template_path):
    report = ReportData.model_validate({
        "managementTeam": [{"description": "PM", "prev": "2.5", "today": 4}],
    })
    ws = _sheet(generate_xlsx_report(report, template_path=template_path))
    first, last = re.fullmatch(r"=SUM\((\w+):(\w+)\)", ws["F25"].value).groups()
    assert (first, last) == ("D25", "E25")
    assert ws[first].value + ws[last].value == row_accumulated("2.5", 4)


def test_logo_added(report, template_path, logo_path):
    document = generate_xlsx_report(report, template_path=template_path, left_logo=logo_path,
                                    right_logo=template_path.parent / "missing.png")
    assert len(load_workbook(BytesIO(document.data))["REPORT"]._images) == 1


def test_missing_template(report, tmp_path):
    with pytest.raises(TemplateError, match="not found"):
        generate_xlsx_report(report, template_path=tmp_path / "nope.xlsx")


def test_corrupt_template(report, tmp_path):
    path = tmp_path / "corrupt.xlsx"
    path.write_bytes(b"definitely not a workbook")
    with pytest.raises(ReportRenderError) as excinfo:
        generate_xlsx_report(report, template_path=path)
    assert isinstance(excinfo.value, TemplateError)
    assert excinfo.value.fmt == "xlsx"


def test_anchor_mismatch_detected(report, tmp_path):
    wb = build_blank_template()
    wb["REPORT"]["B31"] = "Subtotal"
    path = tmp_path / "edited.xlsx"
    wb.save(path)
    with pytest.raises(TemplateError, match="B31"):
        generate_xlsx_report(report, template_path=path)


def test_template_too_small(report, tmp_path):
    wb = build_blank_template()
    wb.remove(wb["REPORT"])
    wb.create_sheet("REPORT")["B9"] = "only a few rows"
    path = tmp_path / "short.xlsx"
    wb.save(path)
    with pytest.raises(TemplateError, match="too small"):
        generate_xlsx_report(report, template_path=path)
