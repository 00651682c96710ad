"""Utilities module."""

from .calculations import TableTotals, compute_totals, effective_row_count, format_number, safe_number
from .file_utils import FileUtils
from .text_utils import reflow
