"""File handling utilities."""

import base64
import logging
import re
import unicodedata
import zipfile
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

_UNDERSCORES = re.compile(r"_+")


class FileUtils:
    """Utilities for file operations."""

    @staticmethod
    def load_logo_bytes(path) -> Optional[bytes]:
        """Read a logo image; a missing or unreadable file yields ``None``."""
        if path is None:
            return None
        path = Path(path)
        try:
            return path.read_bytes()
        except OSError as e:
            logger.warning(f"Logo not available at {path}: {e}")
            return None

    @staticmethod
    def create_pdf_embed(pdf_bytes: Optional[bytes], height: int = 900) -> str:
        """Create an HTML iframe that shows a PDF inline."""
        if not pdf_bytes:
            return ""

        b64 = base64.b64encode(pdf_bytes).decode()
        return (
            f"<iframe src='data:application/pdf;base64,{b64}' "
            f"width='100%' height='{height}' style='border:1px solid #111'></iframe>"
        )

    @staticmethod
    def sanitize_file_part(text: Optional[str], fallback: str, keep: str = "") -> str:
        """Collapse every run of characters other than letters, digits and marks into one underscore.

        Letters of any script are kept; characters listed in ``keep`` are kept as well.
        """
        chars = [c if c in keep or unicodedata.category(c)[0] in "LNM" else "_" for c in (text or "").strip()]
        cleaned = _UNDERSCORES.sub("_", "".join(chars)).strip("_")
        return cleaned or fallback

    @staticmethod
    def format_long_date(value: Optional[date]) -> str:
        """``October 18, 2026`` style date, ``N/A`` when absent."""
        if value is None:
            return "N/A"
        return f"{value.strftime('%B')} {value.day}, {value.year}"

    @staticmethod
    def report_file_name(project_name: Optional[str], report_date: Optional[date], ext: str) -> str:
        """Deterministic export name: ``Daily_Report_<Project>_<Date>.<ext>``."""
        project = FileUtils.sanitize_file_part(project_name, "Report")
        when = FileUtils.sanitize_file_part(FileUtils.format_long_date(report_date), "N_A")
        return f"Daily_Report_{project}_{when}.{ext.lstrip('.')}"

    @staticmethod
    def weekly_report_file_name(project_name: Optional[str], start: str, end: str) -> str:
        project = FileUtils.sanitize_file_part(project_name, "Report")
        start = FileUtils.sanitize_file_part(start, "N_A", keep="-")
        end = FileUtils.sanitize_file_part(end, "N_A", keep="-")
        return f"Weekly_Report_{project}_{start}_to_{end}.pdf"

    @staticmethod
    def resolve_file_name(custom: Optional[str], default: str) -> str:
        """Use a user-entered name if given, forcing the default's extension."""
        name = (custom or "").strip()
        if not name:
            return default
        ext = Path(default).suffix
        stem = name[: -len(ext)] if ext and name.lower().endswith(ext.lower()) else name
        stem = re.sub(r'[\\/:*?"<>|]+', "_", stem).strip(" .") or Path(default).stem
        return f"{stem}{ext}"

    @staticmethod
    def zip_bytes(entries: Iterable[Tuple[str, bytes]]) -> bytes:
        """Pack ``(name, payload)`` pairs into an in-memory ZIP archive."""
        bio = BytesIO()
        with zipfile.ZipFile(bio, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, payload in entries:
                zf.writestr(name, payload)
        return bio.getvalue()
