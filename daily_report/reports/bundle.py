"""ZIP bundle of the PDF and Excel reports."""

import logging
import zipfile
from typing import Optional

from ..models.document import RenderedDocument
from ..models.report import ReportData
from ..utils.file_utils import FileUtils
from .errors import ReportRenderError
from .layout import report_file_name
from .pdf_generator import generate_pdf_report
from .xlsx_generator import generate_xlsx_report

logger = logging.getLogger(__name__)


def generate_zip_report(report: ReportData, file_name: Optional[str] = None, **xlsx_options) -> RenderedDocument:
    """Bundle the PDF and the Excel export of ``report`` into one archive.

    Generation is sequential, PDF first; if either export fails no archive
    is produced and the renderer's error propagates.
    """
    pdf = generate_pdf_report(report)
    xlsx = generate_xlsx_report(report, **xlsx_options)
    try:
        data = FileUtils.zip_bytes([(pdf.file_name, pdf.data), (xlsx.file_name, xlsx.data)])
    except (OSError, zipfile.LargeZipFile) as e:
        logger.exception("ZIP assembly failed")
        raise ReportRenderError(f"Could not assemble the ZIP archive: {e}", fmt="zip") from e
    name = FileUtils.resolve_file_name(file_name, report_file_name(report, "zip"))
    logger.info(f"Bundled {pdf.file_name} and {xlsx.file_name} into {name}")
    return RenderedDocument(name, data)
