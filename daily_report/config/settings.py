"""Application settings and constants."""

import os

import streamlit as st

# Visual Theme
BRAND_BLUE = "3498DB"    # group titles, sub-headers, panel headers
HEADER_TINT = "D9E1F2"   # column headers and TOTAL rows
STRIPE = "F2F2F2"        # even data rows
GRID_GRAY = "C8C8C8"     # separators inside tables

# Fixed labels
REPORT_TITLE = "DAILY REPORT"
ACTIVITY_TITLE = "Working Activity Today"
PLAN_TITLE = "Work Plan for Next Day"
TEAM_GROUP_TITLE = "Resources Employeed"
MANAGEMENT_TITLE = "Site Management Team"
WORKING_TITLE = "Site Working Team"
MATERIALS_TITLE = "Materials Deliveries"
MACHINERY_TITLE = "Machinery & Equipment"
TOTAL_LABEL = "TOTAL"

# Text panels
PANEL_ROWS = 10
PANEL_LINE_LENGTH = 55

# Minimum body rows per table kind, mirrors the template's pre-sized blocks
TEAM_MIN_ROWS = int(os.getenv("DAILY_REPORT_TEAM_MIN_ROWS", "6"))
MATERIAL_MIN_ROWS = int(os.getenv("DAILY_REPORT_MATERIAL_MIN_ROWS", "1"))

DATE_FORMAT = "yyyy-mm-dd"

def initialize_session_state():
    """Initialize session state defaults. Call after st.set_page_config()."""
    if "report" not in st.session_state:
        st.session_state.report = None

    if "preview" not in st.session_state:
        st.session_state.preview = None

# Page configuration
PAGE_CONFIG = {
    "page_title": "Daily Report Export",
    "page_icon": "🏗️",
    "layout": "wide",
    "initial_sidebar_state": "collapsed",
}
