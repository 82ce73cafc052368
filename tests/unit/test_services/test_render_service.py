"""
Unit tests for services.render_service module.
"""
import asyncio

import pytest
from PIL import Image
from core.models import SectionConfig
from inspection.diff_engine import compare_inspections
from services.photo_loader import PhotoLoader
from services.render_service import ReportRenderer
from services.report_content import build_report_content


@pytest.fixture
def content(property_info, entry_inspection, exit_inspection):
    comparison = compare_inspections(entry_inspection, exit_inspection)
    return build_report_content(
        property_info, entry_inspection, exit_inspection, comparison, SectionConfig()
    )


class TestReportRenderer:
    """Tests for ReportRenderer."""

    def test_surface_size(self, content):
        """Test the surface has the configured width."""
        surface = asyncio.run(ReportRenderer(width=400, scale=1.0).render(content))

        assert surface.width == 400
        assert surface.height > 0
        surface.close()

    def test_one_block_per_section(self, content):
        """Test header, summary and each room get a protected block."""
        surface = asyncio.run(ReportRenderer(width=400, scale=1.0).render(content))

        assert [b.label for b in surface.blocks] == [
            'header', 'summary', 'room:Sala', 'room:Cozinha', 'room:Banheiro'
        ]
        surface.close()

    def test_blocks_disjoint_and_inside_surface(self, content):
        """Test blocks are ordered, separated and cover the surface ends."""
        surface = asyncio.run(ReportRenderer(width=400, scale=1.0).render(content))
        blocks = surface.blocks

        assert blocks[0].top == 0
        assert blocks[-1].bottom == surface.height
        for previous, current in zip(blocks[:-1], blocks[1:]):
            assert previous.bottom < current.top
        surface.close()

    def test_summary_hidden(self, property_info, entry_inspection, exit_inspection):
        """Test no summary block when the summary is toggled off."""
        comparison = compare_inspections(entry_inspection, exit_inspection)
        content = build_report_content(
            property_info, entry_inspection, exit_inspection, comparison,
            SectionConfig(show_summary=False)
        )

        surface = asyncio.run(ReportRenderer(width=400, scale=1.0).render(content))

        assert 'summary' not in [b.label for b in surface.blocks]
        surface.close()

    def test_deterministic(self, content):
        """Test rendering the same content twice gives identical surfaces."""
        renderer = ReportRenderer(width=300, scale=1.0)

        first = asyncio.run(renderer.render(content))
        second = asyncio.run(renderer.render(content))

        assert first.blocks == second.blocks
        assert first.image.tobytes() == second.image.tobytes()

    def test_renders_local_photos(self, content, temp_dir):
        """Test available photos are drawn and missing ones become placeholders."""
        photo_path = temp_dir / "sala.png"
        Image.new('RGB', (64, 48), color='red').save(photo_path)
        content.rooms[0].entry_photo_url = str(photo_path)

        renderer = ReportRenderer(width=400, scale=1.0, photo_loader=PhotoLoader(), photo_height=80)
        surface = asyncio.run(renderer.render(content))

        sala = surface.blocks[2]
        region = surface.image.crop((0, int(sala.top), surface.width, int(sala.bottom)))
        assert (255, 0, 0) in [color for _, color in region.getcolors(maxcolors=1 << 20)]
        surface.close()
