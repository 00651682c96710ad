"""Reports module for generating PDF, XLSX, DOCX and ZIP exports."""

from .errors import ReportRenderError, TemplateError
from .layout import build_layout
from .pdf_generator import PdfPreview, generate_pdf_report, open_pdf_preview
from .xlsx_generator import generate_xlsx_report
from .xlsx_template import DEFAULT_ANCHORS, TemplateAnchors, build_blank_template, load_template
from .docx_generator import generate_docx_report
from .bundle import generate_zip_report
from .weekly_pdf_generator import generate_weekly_pdf_report
from .exporter import export_report
