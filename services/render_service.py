"""
Render Service - Rasterizes structured report content with Pillow.

The report is drawn as one continuous surface: a header section, an optional
summary section and one section per room, stacked top to bottom. Each
top-level section's vertical interval is returned as a protected block so
the page planner can avoid cutting through it.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from core.constants import (
    DEFAULT_BOLD_FONT_CANDIDATES,
    DEFAULT_FONT_CANDIDATES,
    REPORT_COLORS,
    REPORT_LABELS,
)
from core.exceptions import RenderError
from core.models import ProtectedBlock
from utils.image_utils import fit_image
from utils.text_utils import format_date, wrap_text

from .photo_loader import PhotoLoader
from .report_content import ReportContent, RoomSection

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass
class RenderedSurface:
    """Rasterized report plus the intervals of its top-level sections."""
    image: Image.Image
    blocks: List[ProtectedBlock] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.image.size[0]

    @property
    def height(self) -> int:
        return self.image.size[1]

    def close(self):
        """Release the surface pixels."""
        self.image.close()


def _load_font(size: int, path: Optional[str], candidates: Sequence[str]):
    """Load a TrueType font, falling back to Pillow's bundled default."""
    for candidate in ([path] if path else []) + list(candidates):
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _line_height(font) -> int:
    return int(round(getattr(font, 'size', 12) * 1.4))


class _SectionPainter:
    """
    Lays out one section as a list of drawing operations.

    Operations are recorded with their y position first so the section height
    is known before the image is allocated.
    """

    def __init__(self, width: int, padding: int):
        self.width = width
        self.padding = padding
        self.y = padding
        self.ops: List[tuple] = []

    @property
    def inner_width(self) -> int:
        return self.width - 2 * self.padding

    def space(self, amount: int):
        self.y += amount

    def text(self, text: str, font, color: Color, indent: int = 0, align: str = 'left'):
        for line in wrap_text(text, font, self.inner_width - indent):
            x = self.padding + indent
            if align == 'center':
                x = (self.width - int(font.getlength(line))) // 2
            self.ops.append(('text', (x, self.y), line, font, color))
            self.y += _line_height(font)

    def rule(self, color: Color, gap: int):
        self.y += gap
        self.ops.append(('line', [(self.padding, self.y), (self.width - self.padding, self.y)], color))
        self.y += gap

    def columns(self, cells: Sequence[Sequence[Tuple[str, object, Color]]], gap: int):
        """
        Draw equal-width text columns side by side.

        Each cell is a list of (text, font, color) lines, centered in its column.
        """
        if not cells:
            return
        col_width = (self.inner_width - gap * (len(cells) - 1)) // len(cells)
        tallest = 0
        for index, cell in enumerate(cells):
            x0 = self.padding + index * (col_width + gap)
            y = self.y
            for text, font, color in cell:
                for line in wrap_text(text, font, col_width):
                    x = x0 + (col_width - int(font.getlength(line))) // 2
                    self.ops.append(('text', (x, y), line, font, color))
                    y += _line_height(font)
            tallest = max(tallest, y - self.y)
        self.y += tallest

    def photo_row(
        self,
        photos: Sequence[Optional[Image.Image]],
        captions: Sequence[str],
        height: int,
        caption_font,
        placeholder_font,
        gap: int
    ):
        """Draw photos side by side, each under a caption, in boxes of fixed height."""
        col_width = (self.inner_width - gap * (len(photos) - 1)) // len(photos)
        caption_height = _line_height(caption_font)
        for index, (photo, caption) in enumerate(zip(photos, captions)):
            x0 = self.padding + index * (col_width + gap)
            cx = x0 + (col_width - int(caption_font.getlength(caption))) // 2
            self.ops.append(('text', (cx, self.y), caption, caption_font, REPORT_COLORS['text']))
            box = (x0, self.y + caption_height, x0 + col_width, self.y + caption_height + height)
            self.ops.append(('photo', box, photo, placeholder_font))
        self.y += caption_height + height

    def image(self, img: Image.Image, max_height: int):
        fitted = fit_image(img, (self.inner_width, max_height))
        x = (self.width - fitted.size[0]) // 2
        self.ops.append(('paste', (x, self.y), fitted))
        self.y += fitted.size[1]

    def render(self, background: Color) -> Image.Image:
        height = self.y + self.padding
        img = Image.new('RGB', (self.width, height), background)
        draw = ImageDraw.Draw(img)

        for op in self.ops:
            kind = op[0]
            if kind == 'text':
                _, xy, text, font, color = op
                draw.text(xy, text, font=font, fill=color)
            elif kind == 'line':
                _, points, color = op
                draw.line(points, fill=color, width=2)
            elif kind == 'paste':
                _, xy, fitted = op
                img.paste(fitted, xy)
            elif kind == 'photo':
                _, box, photo, font = op
                self._draw_photo(img, draw, box, photo, font)

        return img

    @staticmethod
    def _draw_photo(img, draw, box, photo, font):
        x0, y0, x1, y1 = box
        draw.rectangle(box, fill=REPORT_COLORS['placeholder'], outline=REPORT_COLORS['rule'])
        if photo is None:
            label = REPORT_LABELS['no_photo']
            tx = x0 + ((x1 - x0) - int(font.getlength(label))) // 2
            ty = y0 + ((y1 - y0) - _line_height(font)) // 2
            draw.text((tx, ty), label, font=font, fill=REPORT_COLORS['muted'])
            return
        fitted = fit_image(photo, (x1 - x0, y1 - y0))
        px = x0 + ((x1 - x0) - fitted.size[0]) // 2
        py = y0 + ((y1 - y0) - fitted.size[1]) // 2
        img.paste(fitted, (px, py))


class ReportRenderer:
    """Renders ReportContent to a continuous surface with protected blocks."""

    def __init__(
        self,
        width: int,
        scale: float = 2.0,
        photo_loader: Optional[PhotoLoader] = None,
        photo_height: int = 320,
        font_path: Optional[str] = None,
        bold_font_path: Optional[str] = None
    ):
        """
        Initialize renderer.

        Args:
            width: Surface width in pixels
            scale: Surface pixels per point, used for font sizes and spacing
            photo_loader: Loader for room photos (None draws placeholders)
            photo_height: Height of room photo boxes in pixels
            font_path: Regular TrueType font (optional)
            bold_font_path: Bold TrueType font (optional)
        """
        self.width = width
        self.scale = scale
        self.photo_loader = photo_loader
        self.photo_height = photo_height

        def pt(size: float) -> int:
            return max(1, int(round(size * scale)))

        self.padding = pt(14)
        self.section_gap = pt(12)
        self.font_title = _load_font(pt(18), bold_font_path, DEFAULT_BOLD_FONT_CANDIDATES)
        self.font_heading = _load_font(pt(13), bold_font_path, DEFAULT_BOLD_FONT_CANDIDATES)
        self.font_subheading = _load_font(pt(11), bold_font_path, DEFAULT_BOLD_FONT_CANDIDATES)
        self.font_body = _load_font(pt(9.5), font_path, DEFAULT_FONT_CANDIDATES)
        self.font_small = _load_font(pt(8), font_path, DEFAULT_FONT_CANDIDATES)
        self.font_count = _load_font(pt(24), bold_font_path, DEFAULT_BOLD_FONT_CANDIDATES)

    async def render(self, content: ReportContent) -> RenderedSurface:
        """
        Render report content.

        Args:
            content: Structured report

        Returns:
            RenderedSurface with one protected block per top-level section

        Raises:
            RenderError: If the surface cannot be produced
        """
        photos: Dict[str, Optional[Image.Image]] = {}
        if self.photo_loader is not None:
            photos = await self.photo_loader.load_many(content.photo_urls())

        try:
            return await asyncio.to_thread(self._render_sync, content, photos)
        except (OSError, ValueError) as e:
            raise RenderError(f"Could not render report surface: {e}") from e
        finally:
            for img in photos.values():
                if img is not None:
                    img.close()

    def _render_sync(self, content: ReportContent, photos: Dict[str, Optional[Image.Image]]) -> RenderedSurface:
        sections: List[Tuple[str, Image.Image]] = [
            ('header', self._render_header(content, photos)),
        ]
        if content.summary is not None:
            sections.append(('summary', self._render_summary(content)))
        for room_section in content.rooms:
            sections.append((f"room:{room_section.room}", self._render_room(room_section, photos)))

        return self._stack(sections)

    def _stack(self, sections: List[Tuple[str, Image.Image]]) -> RenderedSurface:
        total_height = sum(img.size[1] for _, img in sections)
        total_height += self.section_gap * (len(sections) - 1)

        surface = Image.new('RGB', (self.width, total_height), REPORT_COLORS['background'])
        blocks = []
        y = 0
        for label, img in sections:
            surface.paste(img, (0, y))
            blocks.append(ProtectedBlock(top=y, bottom=y + img.size[1], label=label))
            y += img.size[1] + self.section_gap
            img.close()

        logger.debug("Rendered surface %sx%s with %s blocks", self.width, total_height, len(blocks))
        return RenderedSurface(image=surface, blocks=blocks)

    def _render_header(self, content: ReportContent, photos) -> Image.Image:
        header = content.header
        painter = _SectionPainter(self.width, self.padding)
        colors = REPORT_COLORS
        labels = REPORT_LABELS

        logo = photos.get(header.company_logo_url) if header.company_logo_url else None
        if logo is not None:
            painter.image(logo, max_height=int(round(48 * self.scale)))
            painter.space(self.padding // 2)

        painter.text(header.title, self.font_title, colors['text'], align='center')
        painter.text(header.property_name, self.font_heading, colors['muted'], align='center')
        painter.rule(colors['rule'], self.padding // 2)

        painter.text(labels['details'], self.font_heading, colors['text'])
        details = [
            (labels['company'], header.company_name or labels['not_informed']),
            (labels['inspector'], header.inspector_name or labels['not_informed']),
            (labels['property'], header.property_name),
            (labels['address'], header.address or labels['not_informed']),
            (labels['entry_date'], format_date(header.entry_date)),
            (labels['exit_date'], format_date(header.exit_date)),
        ]
        for key, value in details:
            painter.text(f"{key}: {value}", self.font_body, colors['text'])

        if content.notes:
            painter.rule(colors['rule'], self.padding // 2)
            painter.text(labels['notes'], self.font_subheading, colors['text'])
            for note in content.notes:
                painter.text(note, self.font_small, colors['muted'])

        return painter.render(colors['background'])

    def _render_summary(self, content: ReportContent) -> Image.Image:
        totals = content.summary
        painter = _SectionPainter(self.width, self.padding)
        painter.text(REPORT_LABELS['summary'], self.font_heading, REPORT_COLORS['text'])
        painter.space(self.padding // 2)
        painter.columns(
            [
                [(str(getattr(totals, bucket)), self.font_count, REPORT_COLORS[bucket]),
                 (REPORT_LABELS[bucket], self.font_small, REPORT_COLORS['text'])]
                for bucket in ('changed', 'new', 'missing')
            ],
            gap=self.padding,
        )
        return painter.render(REPORT_COLORS['background'])

    def _render_room(self, section: RoomSection, photos) -> Image.Image:
        painter = _SectionPainter(self.width, self.padding)
        painter.text(section.room or '-', self.font_heading, REPORT_COLORS['text'])
        painter.rule(REPORT_COLORS['rule'], self.padding // 3)

        painter.photo_row(
            [photos.get(section.entry_photo_url) if section.entry_photo_url else None,
             photos.get(section.exit_photo_url) if section.exit_photo_url else None],
            [REPORT_LABELS['entry'], REPORT_LABELS['exit']],
            height=self.photo_height,
            caption_font=self.font_subheading,
            placeholder_font=self.font_body,
            gap=self.padding,
        )

        indent = self.padding
        for group in section.groups:
            painter.space(self.padding // 2)
            painter.text(f"{group.title} ({group.count})", self.font_subheading, REPORT_COLORS[group.bucket])
            for line in group.lines:
                text = f"- {line.text}: {line.detail}" if line.detail else f"- {line.text}"
                painter.text(text, self.font_body, REPORT_COLORS['text'], indent=indent)

        return painter.render(REPORT_COLORS['background'])
