"""Daily report data models using Pydantic."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.calculations import safe_number


class ResourceRow(BaseModel):
    """One line item of a management, working, material or machinery table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    description: str = ""
    unit: str = ""
    prev: float = 0.0
    today: float = 0.0
    accumulated: float = 0.0

    @field_validator("prev", "today", "accumulated", mode="before")
    @classmethod
    def _coerce_quantity(cls, v):
        return safe_number(v)

    @field_validator("description", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return "" if v is None else str(v)


class ReportData(BaseModel):
    """A finished daily report, as supplied by the report-fetching collaborator.

    Keys may use the web client's camelCase names (``projectName``,
    ``weatherAM`` ...) or the snake_case field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    project_name: str = Field("", alias="projectName")
    report_date: Optional[date] = Field(None, alias="reportDate")
    weather_am: str = Field("", alias="weatherAM")
    weather_pm: str = Field("", alias="weatherPM")
    temp_am: str = Field("", alias="tempAM")
    temp_pm: str = Field("", alias="tempPM")
    activity_today: str = Field("", alias="activityToday")
    work_plan_next_day: str = Field("", alias="workPlanNextDay")
    management_team: List[ResourceRow] = Field(default_factory=list, alias="managementTeam")
    working_team: List[ResourceRow] = Field(default_factory=list, alias="workingTeam")
    materials: List[ResourceRow] = Field(default_factory=list)
    machinery: List[ResourceRow] = Field(default_factory=list)

    @field_validator(
        "project_name", "weather_am", "weather_pm", "temp_am", "temp_pm",
        "activity_today", "work_plan_next_day", mode="before",
    )
    @classmethod
    def _coerce_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("report_date", mode="before")
    @classmethod
    def _coerce_date(cls, v):
        if v in (None, ""):
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            # ISO timestamps coming from the browser
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    @field_validator("management_team", "working_team", "materials", "machinery", mode="before")
    @classmethod
    def _coerce_rows(cls, v):
        return [] if v is None else v


class WeeklyRoleTotal(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    role: str = ""
    total: float = 0.0

    @field_validator("total", mode="before")
    @classmethod
    def _coerce_total(cls, v):
        return safe_number(v)


class WeeklyUsage(BaseModel):
    """Machinery usage or material delivery summed over the week."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    description: str = ""
    unit: str = ""
    total: float = Field(0.0, validation_alias=AliasChoices("total", "totalUsage", "totalDelivered"))

    @field_validator("total", mode="before")
    @classmethod
    def _coerce_total(cls, v):
        return safe_number(v)


class WeeklyReportData(BaseModel):
    """Weekly summary built from a range of daily reports.

    Accepts the nested payload of the weekly report service
    (``projectInfo``, ``summary``, ``manpower.weeklyTotals``) as well as the
    flat field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    start_date: str = Field("", alias="startDate")
    end_date: str = Field("", alias="endDate")
    project_name: str = Field("", alias="projectName")
    client: str = ""
    contractor: str = ""
    total_reports: int = Field(0, alias="totalReports")
    submitted_reports: int = Field(0, alias="submittedReports")
    overall_progress: str = Field("", alias="overallProgress")
    key_highlights: List[str] = Field(default_factory=list, alias="keyHighlights")
    manpower: List[WeeklyRoleTotal] = Field(default_factory=list)
    machinery: List[WeeklyUsage] = Field(default_factory=list)
    materials: List[WeeklyUsage] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        info = data.pop("projectInfo", None) or {}
        for key in ("projectName", "client", "contractor"):
            if key in info:
                data.setdefault(key, info[key])
        summary = data.pop("summary", None) or {}
        for key in ("overallProgress", "keyHighlights"):
            if key in summary:
                data.setdefault(key, summary[key])
        manpower = data.get("manpower")
        if isinstance(manpower, dict):
            data["manpower"] = manpower.get("weeklyTotals", [])
        return data
