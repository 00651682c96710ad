"""Single entry point for every daily report export format."""

import logging
from typing import Callable, Dict, Optional

from ..models.document import RenderedDocument
from ..models.report import ReportData
from .bundle import generate_zip_report
from .docx_generator import generate_docx_report
from .pdf_generator import generate_pdf_report
from .xlsx_generator import generate_xlsx_report

logger = logging.getLogger(__name__)

EXPORTERS: Dict[str, Callable[..., RenderedDocument]] = {
    "pdf": generate_pdf_report,
    "xlsx": generate_xlsx_report,
    "docx": generate_docx_report,
    "zip": generate_zip_report,
}


def export_report(report: ReportData, fmt: str, file_name: Optional[str] = None, **options) -> RenderedDocument:
    """Render ``report`` as ``fmt`` (pdf, xlsx, docx or zip).

    Raises ``ValueError`` for an unknown format and ``ReportRenderError``
    when the export itself fails.
    """
    key = (fmt or "").lower().lstrip(".")
    if key == "excel":
        key = "xlsx"
    if key not in EXPORTERS:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    return EXPORTERS[key](report, file_name=file_name, **options)
