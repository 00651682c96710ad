import zipfile
from datetime import date
from io import BytesIO

from daily_report.utils.file_utils import FileUtils


def test_report_file_name():
    name = FileUtils.report_file_name("Site A - Phase 2", date(2026, 10, 18), "pdf")
    assert name == "Daily_Report_Site_A_Phase_2_October_18_2026.pdf"


def test_report_file_name_fallbacks():
    assert FileUtils.report_file_name("", None, ".zip") == "Daily_Report_Report_N_A.zip"
    assert FileUtils.report_file_name("  /// ", None, "docx") == "Daily_Report_Report_N_A.docx"


def test_file_name_is_deterministic(report):
    first = FileUtils.report_file_name(report.project_name, report.report_date, "xlsx")
    second = FileUtils.report_file_name(report.project_name, report.report_date, "xlsx")
    assert first == second


def test_weekly_file_name():
    assert FileUtils.weekly_report_file_name("Site A", "2026-10-12", "2026-10-18") == \
        "Weekly_Report_Site_A_2026-10-12_to_2026-10-18.pdf"


def test_resolve_file_name():
    default = "Daily_Report_X_N_A.pdf"
    assert FileUtils.resolve_file_name("", default) == default
    assert FileUtils.resolve_file_name(None, default) == default
    assert FileUtils.resolve_file_name("my report", default) == "my report.pdf"
    assert FileUtils.resolve_file_name("final.PDF", default) == "final.pdf"
    assert FileUtils.resolve_file_name("a/b:c", default) == "a_b_c.pdf"


def test_load_logo_bytes_missing(tmp_path):
    assert FileUtils.load_logo_bytes(tmp_path / "missing.png") is None
    assert FileUtils.load_logo_bytes(None) is None


def test_zip_bytes():
    data = FileUtils.zip_bytes([("a.txt", b"A"), ("b.txt", b"B")])
    with zipfile.ZipFile(BytesIO(data)) as zf:
        assert zf.namelist() == ["a.txt", "b.txt"]
        assert zf.read("b.txt") == b"B"


def test_create_pdf_embed():
    assert FileUtils.create_pdf_embed(None) == ""
    assert "data:application/pdf;base64," in FileUtils.create_pdf_embed(b"%PDF")


def test_non_latin_project_names_are_kept():
    name = FileUtils.report_file_name("សាលា 学校", None, "pdf")
    assert name == "Daily_Report_សាលា_学校_N_A.pdf"
    assert FileUtils.report_file_name("学校", None, "pdf") != FileUtils.report_file_name("病院", None, "pdf")


def test_weekly_dates_are_sanitized():
    name = FileUtils.weekly_report_file_name("X", "2026/10/12", "2026/10/18")
    assert name == "Weekly_Report_X_2026_10_12_to_2026_10_18.pdf"
    assert FileUtils.weekly_report_file_name("X", "", None) == "Weekly_Report_X_N_A_to_N_A.pdf"
