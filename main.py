"""
Daily Report Export - Main Application Entry Point

Flow:
    main() -> configure -> style -> header -> export page

Run with ``streamlit run main.py``. The Excel and ZIP exports need the
spreadsheet template; generate it once with ``python scripts/build_template.py``
(written to ``assets/templates/daily_report_template.xlsx`` unless
``DAILY_REPORT_TEMPLATE`` points elsewhere).
"""

import streamlit as st

from daily_report.config import PAGE_CONFIG, setup_logging, initialize_session_state
st.set_page_config(**PAGE_CONFIG)

from daily_report.pages import ExportPage
from daily_report.ui import Header, UIStyles


def main():
    # Must run after set_page_config()
    initialize_session_state()

    logger = setup_logging()
    logger.info("Daily report export application started")

    UIStyles.apply_theme()
    Header().render()
    ExportPage.render()


if __name__ == "__main__":
    main()
