import pytest
from PIL import Image

from daily_report.models import ReportData
from daily_report.reports import build_blank_template


def make_rows(count, prefix="Item", unit="", prev=1, today=2):
    return [
        {"description": f"{prefix} {i + 1}", "unit": unit, "prev": prev, "today": today,
         "accumulated": prev + today}
        for i in range(count)
    ]


@pytest.fixture
def report_payload():
    return {
        "projectName": "Site A - Phase 2",
        "reportDate": "2026-10-18",
        "weatherAM": "Sunny",
        "weatherPM": "Cloudy",
        "tempAM": "24",
        "tempPM": "29",
        "activityToday": "Poured concrete for slab B. Installed rebar on level 3. Cleaned the site.",
        "workPlanNextDay": "Cure slab B.\nStart formwork on level 4.",
        "managementTeam": make_rows(2, "Engineer"),
        "workingTeam": make_rows(4, "Mason"),
        "materials": [{"description": "Cement", "unit": "bag", "prev": 10, "today": "5", "accumulated": 15}],
        "machinery": [{"description": "Excavator", "unit": "unit", "prev": 1, "today": 1, "accumulated": 2}],
    }


@pytest.fixture
def report(report_payload):
    return ReportData.model_validate(report_payload)


@pytest.fixture
def empty_report():
    return ReportData(project_name="Empty Site")


@pytest.fixture
def template_path(tmp_path):
    path = tmp_path / "daily_report_template.xlsx"
    build_blank_template().save(path)
    return path


@pytest.fixture
def logo_path(tmp_path):
    path = tmp_path / "logo.png"
    Image.new("RGB", (120, 40), (52, 152, 219)).save(path)
    return path
