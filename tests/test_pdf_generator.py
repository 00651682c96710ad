from datetime import datetime
from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader

from daily_report.models import ReportData
from daily_report.reports import ReportRenderError, generate_pdf_report, open_pdf_preview
from daily_report.reports.layout import build_layout
from daily_report.reports.pdf_generator import render_pdf

from conftest import make_rows


def _text(data: bytes) -> str:
    return "\n".join(page.extract_text() for page in PdfReader(BytesIO(data)).pages)


def test_pdf_contains_report_content(report, logo_path):
    document = generate_pdf_report(report, left_logo=logo_path, right_logo=logo_path)
    assert document.file_name == "Daily_Report_Site_A_Phase_2_October_18_2026.pdf"
    assert document.data.startswith(b"%PDF")
    text = _text(document.data)
    assert "DAILY REPORT" in text
    assert "Site A - Phase 2" in text
    assert "Cement" in text
    assert "TOTAL" in text


def test_footer_stamp(report):
    data = render_pdf(build_layout(report), generated_on=datetime(2026, 10, 18, 9, 30))
    assert "Generated on 2026-10-18 09:30:00" in _text(data)


def test_long_tables_paginate():
    report = ReportData.model_validate({"managementTeam": make_rows(150, "Engineer")})
    reader = PdfReader(BytesIO(generate_pdf_report(report).data))
    assert len(reader.pages) > 1


def test_missing_and_broken_logos_are_tolerated(report, tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not an image")
    document = generate_pdf_report(report, left_logo=tmp_path / "missing.png", right_logo=broken)
    assert document.data.startswith(b"%PDF")


def test_custom_file_name(report):
    assert generate_pdf_report(report, file_name="site log").file_name == "site log.pdf"


def test_render_failure_is_wrapped(report, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("canvas exploded")

    monkeypatch.setattr("daily_report.reports.pdf_generator.render_pdf", boom)
    with pytest.raises(ReportRenderError) as excinfo:
        generate_pdf_report(report)
    assert excinfo.value.fmt == "pdf"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_preview_is_released(report):
    preview = open_pdf_preview(report)
    path = Path(preview.path)
    assert path.read_bytes().startswith(b"%PDF")
    assert preview.uri.startswith("file://")

    preview.release()
    assert preview.released
    assert not path.exists()
    preview.release()
    with pytest.raises(ValueError):
        preview.uri


def test_preview_context_manager(report):
    with open_pdf_preview(report) as preview:
        path = Path(preview.path)
        assert path.exists()
    assert not path.exists()
