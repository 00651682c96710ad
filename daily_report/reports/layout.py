"""Format-independent description of a daily report document.

Every renderer lowers the same ``ReportLayout`` into its own primitives
(canvas coordinates, worksheet cells, word-processing tables), so reflow,
totals and minimum row counts are decided exactly once per export.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import settings
from ..models.report import ReportData, ResourceRow
from ..utils.calculations import TableTotals, compute_totals, effective_row_count
from ..utils.file_utils import FileUtils
from ..utils.text_utils import reflow


@dataclass(frozen=True)
class InfoLines:
    project_name: str
    weather_am: str
    weather_pm: str
    temp_am: str
    temp_pm: str
    date_text: str

    @property
    def project_label(self) -> str:
        return "Project Name : "

    @property
    def project_line(self) -> str:
        return f"{self.project_label}{self.project_name}"

    @property
    def weather_line(self) -> str:
        return f"Weather          : AM {self.weather_am}  |  PM {self.weather_pm}"

    @property
    def temperature_line(self) -> str:
        return f"Temperature  : AM {self.temp_am}    |  PM {self.temp_pm}"


@dataclass(frozen=True)
class TextPanels:
    left_title: str
    right_title: str
    left_lines: Tuple[str, ...]
    right_lines: Tuple[str, ...]

    @property
    def row_count(self) -> int:
        return len(self.left_lines)


@dataclass(frozen=True)
class ResourceTable:
    title: str
    rows: Tuple[ResourceRow, ...]
    totals: TableTotals

    def row(self, index: int) -> Optional[ResourceRow]:
        """The data row at ``index``, or ``None`` for a padding row."""
        return self.rows[index] if index < len(self.rows) else None


@dataclass(frozen=True)
class ResourceTablePair:
    group_title: str
    left: ResourceTable
    right: ResourceTable
    has_unit: bool
    minimum_rows: int

    @property
    def row_count(self) -> int:
        return effective_row_count(self.left.rows, self.right.rows, self.minimum_rows)

    @property
    def columns(self) -> List[str]:
        if self.has_unit:
            return ["Description", "Unit", "Prev", "Today", "Accum"]
        return ["Description", "Prev", "Today", "Accum"]


@dataclass(frozen=True)
class ReportLayout:
    title: str
    info: InfoLines
    panels: TextPanels
    pairs: Tuple[ResourceTablePair, ...]


def format_temperature(value: str) -> str:
    return f"{value}°C" if value else ""


def build_pair(group_title: str, left_title: str, left_rows, right_title: str, right_rows,
               has_unit: bool, minimum_rows: int) -> ResourceTablePair:
    left_rows = tuple(left_rows)
    right_rows = tuple(right_rows)
    return ResourceTablePair(
        group_title=group_title,
        left=ResourceTable(left_title, left_rows, compute_totals(left_rows, right_rows, minimum_rows)),
        right=ResourceTable(right_title, right_rows, compute_totals(right_rows, left_rows, minimum_rows)),
        has_unit=has_unit,
        minimum_rows=minimum_rows,
    )


def build_layout(report: ReportData,
                 team_min_rows: int = settings.TEAM_MIN_ROWS,
                 material_min_rows: int = settings.MATERIAL_MIN_ROWS) -> ReportLayout:
    """Build the logical document every export format renders."""
    info = InfoLines(
        project_name=report.project_name,
        weather_am=report.weather_am,
        weather_pm=report.weather_pm,
        temp_am=format_temperature(report.temp_am),
        temp_pm=format_temperature(report.temp_pm),
        date_text=report.report_date.isoformat() if report.report_date else "",
    )
    panels = TextPanels(
        left_title=settings.ACTIVITY_TITLE,
        right_title=settings.PLAN_TITLE,
        left_lines=tuple(reflow(report.activity_today, settings.PANEL_ROWS)),
        right_lines=tuple(reflow(report.work_plan_next_day, settings.PANEL_ROWS)),
    )
    pairs = (
        build_pair(settings.TEAM_GROUP_TITLE,
                   settings.MANAGEMENT_TITLE, report.management_team,
                   settings.WORKING_TITLE, report.working_team,
                   has_unit=False, minimum_rows=team_min_rows),
        build_pair("",
                   settings.MATERIALS_TITLE, report.materials,
                   settings.MACHINERY_TITLE, report.machinery,
                   has_unit=True, minimum_rows=material_min_rows),
    )
    return ReportLayout(title=settings.REPORT_TITLE, info=info, panels=panels, pairs=pairs)


def report_file_name(report: ReportData, ext: str) -> str:
    return FileUtils.report_file_name(report.project_name, report.report_date, ext)
