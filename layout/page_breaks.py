"""
Page Break Planner

Splits a continuously rendered report surface into fixed-height pages
without cutting through protected content blocks.

The planner is greedy, single-pass and forward-only: each page's end depends
only on where the previous page ended and on the nearest block crossing the
ideal page boundary. Committed pages are never revisited. A block taller than
one page cannot be kept whole; in that case the content is split at the page
limit and a warning is logged instead of failing or looping.
"""
import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from core.constants import MAX_PAGE_COUNT, MIN_FILL_RATIO
from core.models import ProtectedBlock

logger = logging.getLogger(__name__)

Number = Union[int, float]
BlockLike = Union[ProtectedBlock, Tuple[Number, Number]]


def _to_block(block: BlockLike) -> ProtectedBlock:
    if isinstance(block, ProtectedBlock):
        return block
    top, bottom = block[0], block[1]
    return ProtectedBlock(top=top, bottom=bottom)


def normalize_blocks(blocks: Optional[Iterable[BlockLike]]) -> List[ProtectedBlock]:
    """
    Convert blocks to ProtectedBlock and sort them by top (stable).

    Degenerate blocks (bottom <= top) and blocks with non-finite edges
    are dropped.
    """
    converted = [_to_block(b) for b in (blocks or [])]
    return sorted(
        (
            b for b in converted
            if math.isfinite(b.top) and math.isfinite(b.bottom) and b.bottom > b.top
        ),
        key=lambda b: b.top
    )


def find_straddling_block(blocks: Sequence[ProtectedBlock], offset: Number) -> Optional[int]:
    """
    Index of the first block (in the given order) that a cut at offset would slice.

    Returns:
        Block index, or None when the cut is clean
    """
    for index, block in enumerate(blocks):
        if block.straddles(offset):
            return index
    return None


def _fits_before(edge: Number, cursor: Number, min_fill: float) -> bool:
    # Breaking at a block top must leave enough content on the page
    return edge > cursor and edge - cursor >= min_fill


def _fits_after(edge: Number, cursor: Number, max_page_height: Number) -> bool:
    # Breaking at a block bottom must not exceed the physical page
    return edge > cursor and edge - cursor <= max_page_height


def _resolve_straddle(
    blocks: Sequence[ProtectedBlock],
    cursor: Number,
    ideal_end: Number,
    max_page_height: Number,
    min_fill: float
) -> Number:
    """Pick the page end when a block crosses the ideal boundary."""
    index = find_straddling_block(blocks, ideal_end)
    if index is None:
        return ideal_end

    block = blocks[index]

    if _fits_before(block.top, cursor, min_fill):
        return block.top

    if _fits_after(block.bottom, cursor, max_page_height):
        return block.bottom

    # Block alone is too tall and breaking before it underfills the page:
    # fall back to the nearest earlier block end that still fills the page.
    for earlier in reversed(blocks[:index]):
        if earlier.bottom <= ideal_end and _fits_before(earlier.bottom, cursor, min_fill):
            return earlier.bottom

    logger.debug(
        "No clean break for block %s (%s-%s) on page starting at %s",
        block.label or index, block.top, block.bottom, cursor
    )
    return ideal_end


def _safety_sweep(
    blocks: Sequence[ProtectedBlock],
    cursor: Number,
    candidate: Number,
    max_page_height: Number,
    min_fill: float
) -> Number:
    """Nudge a candidate that still falls inside a block to the closer feasible edge."""
    for block in blocks:
        if not block.straddles(candidate):
            continue

        edges = sorted((block.top, block.bottom), key=lambda edge: abs(edge - candidate))
        for edge in edges:
            if edge == block.top and _fits_before(edge, cursor, min_fill):
                return edge
            if edge == block.bottom and _fits_after(edge, cursor, max_page_height):
                return edge

        logger.warning(
            "Splitting protected block %s (%s-%s) at %s: no break fits the page budget",
            block.label or "<unnamed>", block.top, block.bottom, candidate
        )
        return candidate

    return candidate


def plan_breaks(
    content_height: Number,
    max_page_height: Number,
    protected_blocks: Optional[Iterable[BlockLike]] = None,
    min_fill_ratio: float = MIN_FILL_RATIO
) -> List[Number]:
    """
    Plan page cut offsets over a rendered surface.

    For every page the ideal end is ``cursor + max_page_height``. When a
    protected block straddles it, the break moves before the block if that
    leaves at least ``min_fill_ratio * max_page_height`` on the page,
    otherwise after the block if the page still fits, otherwise to the
    nearest earlier block end that fills the page, otherwise it stays at the
    ideal end. The result is clamped to the page height and swept once more
    against all blocks.

    Args:
        content_height: Total height of the rendered surface
        max_page_height: Usable page content height, in surface units
        protected_blocks: ``ProtectedBlock`` or ``(top, bottom)`` intervals
        min_fill_ratio: Minimum page fill before a block may pull a break earlier

    Returns:
        Strictly increasing offsets ``[0, c1, ..., content_height]``
        (``[0]`` when there is no content)
    """
    if not math.isfinite(content_height):
        logger.warning("Invalid content height %s; nothing to paginate", content_height)
        return [0]

    if content_height <= 0:
        return [0]

    if not math.isfinite(max_page_height) or max_page_height <= 0:
        logger.warning(
            "Invalid page height %s; emitting content as a single page",
            max_page_height
        )
        return [0, content_height]

    if content_height / max_page_height > MAX_PAGE_COUNT:
        logger.warning(
            "Content height %s needs more than %d pages of %s; emitting a single page",
            content_height, MAX_PAGE_COUNT, max_page_height
        )
        return [0, content_height]

    blocks = normalize_blocks(protected_blocks)
    min_fill = min_fill_ratio * max_page_height

    breaks: List[Number] = [0]
    cursor: Number = 0

    while cursor < content_height:
        ideal_end = cursor + max_page_height
        if ideal_end >= content_height:
            break

        candidate = _resolve_straddle(blocks, cursor, ideal_end, max_page_height, min_fill)
        candidate = min(candidate, ideal_end)
        candidate = _safety_sweep(blocks, cursor, candidate, max_page_height, min_fill)

        if candidate <= cursor:
            candidate = ideal_end

        breaks.append(candidate)
        cursor = candidate

    breaks.append(content_height)
    return breaks


def page_ranges(breaks: Sequence[Number]) -> List[Tuple[Number, Number]]:
    """Consecutive (top, bottom) pairs of a break list."""
    return list(zip(breaks[:-1], breaks[1:]))
