"""Export page: load a report payload, inspect it and download every format."""

import logging

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from ..models import ReportData, WeeklyReportData
from ..reports import ReportRenderError, export_report, generate_weekly_pdf_report
from ..reports.layout import build_layout
from ..utils.file_utils import FileUtils

logger = logging.getLogger(__name__)

FORMAT_LABELS = {
    "pdf": "PDF",
    "xlsx": "Excel",
    "docx": "Word",
    "zip": "ZIP (PDF + Excel)",
}


class ExportPage:
    """Daily and weekly report export page."""

    @staticmethod
    def render():
        tab_daily, tab_weekly = st.tabs(["Daily Report", "Weekly Report"])
        with tab_daily:
            ExportPage._render_daily()
        with tab_weekly:
            ExportPage._render_weekly()

    @staticmethod
    def _render_daily():
        upload = st.file_uploader("Daily report JSON", type=["json"], key="daily_upload")
        if upload is not None:
            try:
                st.session_state.report = ReportData.model_validate_json(upload.getvalue())
            except ValidationError as e:
                st.error(f"Invalid report payload: {e}")
                return

        report = st.session_state.report
        if report is None:
            st.info("Upload a daily report to export it.")
            return

        ExportPage._render_summary(report)

        fmt = st.radio("Format", list(FORMAT_LABELS), format_func=FORMAT_LABELS.get, horizontal=True)
        custom_name = st.text_input("File name (optional)", placeholder=FileUtils.report_file_name(
            report.project_name, report.report_date, fmt))

        try:
            document = export_report(report, fmt, file_name=custom_name)
        except ReportRenderError as e:
            logger.error(f"Export to {fmt} failed: {e}")
            st.error(f"Could not export the report as {FORMAT_LABELS[fmt]}: {e}")
            return

        st.download_button(
            f"Download {FORMAT_LABELS[fmt]}",
            data=document.data,
            file_name=document.file_name,
            mime=document.mime_type,
        )
        if fmt == "pdf":
            st.markdown(FileUtils.create_pdf_embed(document.data), unsafe_allow_html=True)

    @staticmethod
    def _render_summary(report: ReportData):
        """Show header fields and per-table totals before exporting."""
        layout = build_layout(report)
        c1, c2, c3 = st.columns(3)
        c1.metric("Project", layout.info.project_name or "-")
        c2.metric("Date", layout.info.date_text or "-")
        c3.metric("Weather (AM / PM)", f"{layout.info.weather_am or '-'} / {layout.info.weather_pm or '-'}")

        rows = []
        for pair in layout.pairs:
            for table in (pair.left, pair.right):
                rows.append({
                    "Table": table.title,
                    "Rows": len(table.rows),
                    "Prev": table.totals.total_prev,
                    "Today": table.totals.total_today,
                    "Accum": table.totals.total_accumulated,
                })
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    @staticmethod
    def _render_weekly():
        upload = st.file_uploader("Weekly report JSON", type=["json"], key="weekly_upload")
        if upload is None:
            st.info("Upload a weekly summary to export it.")
            return
        try:
            weekly = WeeklyReportData.model_validate_json(upload.getvalue())
        except ValidationError as e:
            st.error(f"Invalid weekly payload: {e}")
            return

        try:
            document = generate_weekly_pdf_report(weekly)
        except ReportRenderError as e:
            st.error(str(e))
            return

        st.download_button("Download weekly PDF", data=document.data,
                           file_name=document.file_name, mime=document.mime_type)
