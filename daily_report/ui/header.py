"""Header component for the application."""

import streamlit as st

from ..config.paths import LEFT_LOGO, RIGHT_LOGO
from ..config.settings import PAGE_CONFIG
from ..utils.file_utils import FileUtils


class Header:
    """Application header: both report logos around the page title."""

    def __init__(self):
        self.left_logo = FileUtils.load_logo_bytes(LEFT_LOGO)
        self.right_logo = FileUtils.load_logo_bytes(RIGHT_LOGO)

    def render(self):
        cl, cm, cr = st.columns([0.2, 0.6, 0.2])

        with cl:
            if self.left_logo:
                st.image(self.left_logo, width=140)

        with cm:
            st.markdown(
                f"<div class='brand-title'>{PAGE_CONFIG['page_title']}</div>",
                unsafe_allow_html=True
            )

        with cr:
            if self.right_logo:
                st.image(self.right_logo, width=110)
