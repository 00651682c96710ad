"""UI styling and theming."""

import streamlit as st

from ..config.settings import BRAND_BLUE, HEADER_TINT


class UIStyles:
    """Manages UI styling and theme application."""

    @staticmethod
    def apply_theme():
        """Apply the report colours to the Streamlit app."""
        theme_css = f"""
        <style>
          .brand-title {{ font-size: 26px; text-align: center; font-weight: 600; color: #{BRAND_BLUE}; }}

          .stTabs [data-baseweb="tab-list"] button[aria-selected="true"] {{
            box-shadow: inset 0 -2px 0 0 #{BRAND_BLUE};
          }}

          .stDownloadButton button {{
            border: 1px solid #{BRAND_BLUE};
            background: #{HEADER_TINT};
          }}
        </style>
        """
        st.markdown(theme_css, unsafe_allow_html=True)
