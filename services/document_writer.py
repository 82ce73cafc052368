"""
Document Writer - Emits page images as a PDF with PyMuPDF.

Each page image spans the content width of the physical page and is placed
at the configured margin; its height follows from the render scale.
"""
from typing import Sequence

import fitz  # PyMuPDF
from PIL import Image

from core.models import PageLayout
from utils.image_utils import image_to_png_bytes


class PdfDocumentWriter:
    """Writes ordered page images into a PDF document."""

    media_type = "application/pdf"

    def __init__(self, title: str = ""):
        self.title = title

    def write(self, pages: Sequence[Image.Image], layout: PageLayout) -> bytes:
        """
        Build a PDF with one physical page per image.

        Args:
            pages: Page images, all as wide as the rendered surface
            layout: Physical page size and margin in points

        Returns:
            PDF bytes
        """
        doc = fitz.open()
        try:
            for img in pages:
                width_px, height_px = img.size
                scale = layout.scale_for(width_px)
                page = doc.new_page(width=layout.page_width, height=layout.page_height)
                rect = fitz.Rect(
                    layout.margin,
                    layout.margin,
                    layout.margin + layout.content_width,
                    layout.margin + height_px / scale,
                )
                page.insert_image(rect, stream=image_to_png_bytes(img), keep_proportion=False)

            if self.title:
                doc.set_metadata({'title': self.title})
            return doc.tobytes()
        finally:
            doc.close()
