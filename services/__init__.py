"""Services package - Report content, rendering, writing and assembly."""

from .report_content import ReportContent, build_report_content
from .photo_loader import PhotoLoader
from .render_service import ReportRenderer, RenderedSurface
from .document_writer import PdfDocumentWriter
from .report_service import ReportAssembler

__all__ = [
    'ReportContent',
    'build_report_content',
    'PhotoLoader',
    'ReportRenderer',
    'RenderedSurface',
    'PdfDocumentWriter',
    'ReportAssembler',
]
