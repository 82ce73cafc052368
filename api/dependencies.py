"""
API Dependencies - Dependency injection for FastAPI.

Provides reusable dependencies for database sessions, services, etc.
"""
from typing import Generator

from data.database import get_db_manager
from services.document_writer import PdfDocumentWriter
from services.photo_loader import PhotoLoader
from services.render_service import ReportRenderer
from services.report_service import ReportAssembler
from config.settings import settings


def get_db() -> Generator:
    """
    Dependency for database session.

    Yields:
        SQLAlchemy session
    """
    db_manager = get_db_manager()
    db = db_manager.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_renderer() -> ReportRenderer:
    """
    Dependency for the report renderer.

    Returns:
        ReportRenderer sized to the configured page content width
    """
    return ReportRenderer(
        width=settings.get_surface_width(),
        scale=settings.render_scale,
        photo_loader=PhotoLoader(timeout=settings.photo_timeout),
        photo_height=settings.photo_height_px,
        font_path=settings.font_path,
        bold_font_path=settings.font_bold_path
    )


def get_report_assembler() -> ReportAssembler:
    """
    Dependency for the report assembler.

    Returns:
        ReportAssembler wired with renderer, PDF writer and page layout
    """
    return ReportAssembler(
        renderer=get_renderer(),
        writer=PdfDocumentWriter(),
        layout=settings.get_page_layout(),
        min_fill_ratio=settings.min_fill_ratio
    )
