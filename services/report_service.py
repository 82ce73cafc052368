"""
Report Service - Assembles the paginated entry/exit comparison report.

Pipeline: diff every room, project through the section config, render the
content to one surface, plan page breaks on it, slice it into page images
and hand those to the document writer. Either a complete document comes out
or a single ReportGenerationError is raised.
"""
import logging
import math
from typing import Optional

from core.constants import MIN_FILL_RATIO
from core.exceptions import ReportGenerationError
from core.models import (
    InspectionData,
    PagedDocument,
    PageLayout,
    PropertyInfo,
    SectionConfig,
)
from inspection.diff_engine import compare_inspections
from layout.page_breaks import plan_breaks
from utils.image_utils import slice_surface

from .report_content import build_report_content

logger = logging.getLogger(__name__)


class ReportAssembler:
    """Orchestrates comparison, rendering, pagination and writing."""

    def __init__(
        self,
        renderer,
        writer,
        layout: PageLayout,
        min_fill_ratio: float = MIN_FILL_RATIO
    ):
        """
        Initialize assembler.

        Args:
            renderer: Object with ``async render(content) -> RenderedSurface``
            writer: Object with ``write(pages, layout) -> bytes``
            layout: Physical page geometry
            min_fill_ratio: Page fill threshold passed to the planner
        """
        self.renderer = renderer
        self.writer = writer
        self.layout = layout
        self.min_fill_ratio = min_fill_ratio

    async def assemble_report(
        self,
        property_info: PropertyInfo,
        entry_inspection: InspectionData,
        exit_inspection: InspectionData,
        section_config: Optional[SectionConfig] = None,
        inspector_name: Optional[str] = None
    ) -> PagedDocument:
        """
        Build the comparison report for an entry/exit pair.

        Args:
            property_info: Property shown in the header
            entry_inspection: Move-in inspection
            exit_inspection: Move-out inspection
            section_config: Visibility toggles (all visible when None)
            inspector_name: Name printed as inspector

        Returns:
            PagedDocument with break offsets, page images and document bytes

        Raises:
            ReportGenerationError: If rendering, slicing or writing fails
        """
        section_config = section_config or SectionConfig()

        comparison = compare_inspections(entry_inspection, exit_inspection)
        content = build_report_content(
            property_info,
            entry_inspection,
            exit_inspection,
            comparison,
            section_config,
            inspector_name=inspector_name,
        )

        surface = None
        try:
            surface = await self.renderer.render(content)

            # Whole pixels, so rounded slices never exceed the printable area
            max_page_height = math.floor(self.layout.max_page_height_px(surface.width))
            breaks = plan_breaks(
                surface.height,
                max_page_height,
                surface.blocks,
                min_fill_ratio=self.min_fill_ratio,
            )
            pages = slice_surface(surface.image, breaks)
            data = self.writer.write(pages, self.layout)
        except Exception as e:
            logger.error(
                "Report generation failed for inspections %s/%s: %s",
                entry_inspection.inspection_id, exit_inspection.inspection_id, e
            )
            raise ReportGenerationError() from e
        finally:
            if surface is not None:
                surface.close()

        logger.info(
            "Assembled report for inspections %s/%s: %s pages",
            entry_inspection.inspection_id, exit_inspection.inspection_id, len(pages)
        )
        return PagedDocument(
            breaks=breaks,
            page_images=pages,
            layout=self.layout,
            content=data,
            media_type=getattr(self.writer, 'media_type', 'application/pdf'),
        )
