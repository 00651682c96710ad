from io import BytesIO

from pypdf import PdfReader

from daily_report.models import WeeklyReportData
from daily_report.reports import generate_weekly_pdf_report


def _weekly(**overrides):
    payload = {
        "startDate": "2026-10-12",
        "endDate": "2026-10-18",
        "projectInfo": {"projectName": "Site A", "client": "City", "contractor": "BuildCo"},
        "totalReports": 6,
        "submittedReports": 5,
        "summary": {"overallProgress": "Structure works on schedule.", "keyHighlights": ["Slab B poured"]},
        "manpower": {"weeklyTotals": [{"role": "Mason", "total": 40}]},
        "machinery": [{"description": "Excavator", "unit": "hrs", "totalUsage": 12.5}],
        "materials": [{"description": "Cement", "unit": "bag", "totalDelivered": 80}],
    }
    payload.update(overrides)
    return WeeklyReportData.model_validate(payload)


def test_weekly_pdf_content():
    document = generate_weekly_pdf_report(_weekly())
    assert document.file_name == "Weekly_Report_Site_A_2026-10-12_to_2026-10-18.pdf"
    text = "\n".join(p.extract_text() for p in PdfReader(BytesIO(document.data)).pages)
    assert "WEEKLY CONSTRUCTION REPORT" in text
    assert "Period: 2026-10-12 to 2026-10-18" in text
    assert "1. Slab B poured" in text
    assert "Mason: 40 personnel" in text
    assert "Excavator: 12.5 hrs" in text


def test_weekly_pdf_breaks_pages():
    highlights = [f"Highlight number {i}" for i in range(120)]
    document = generate_weekly_pdf_report(_weekly(summary={"keyHighlights": highlights}))
    assert len(PdfReader(BytesIO(document.data)).pages) > 1


def test_weekly_pdf_saves_with_slashed_dates(tmp_path):
    document = generate_weekly_pdf_report(_weekly(startDate="2026/10/12", endDate="2026/10/18"))
    saved = document.save(tmp_path)
    assert saved.parent == tmp_path
    assert saved.name == "Weekly_Report_Site_A_2026_10_12_to_2026_10_18.pdf"
    assert saved.read_bytes().startswith(b"%PDF")
