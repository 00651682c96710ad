"""Pages module for different application views."""

from .export_page import ExportPage
