"""Data models for daily report exports."""

from .report import ReportData, ResourceRow, WeeklyReportData, WeeklyRoleTotal, WeeklyUsage
from .document import RenderedDocument
