"""Renderer-level error categories."""

from typing import Optional


class ReportRenderError(Exception):
    """An export failed; the underlying library error is chained as ``__cause__``."""

    def __init__(self, message: str, fmt: Optional[str] = None):
        super().__init__(message)
        self.fmt = fmt


class TemplateError(ReportRenderError):
    """The spreadsheet template is missing, unreadable, or does not match its anchors."""

    def __init__(self, message: str):
        super().__init__(message, fmt="xlsx")
