"""Layout package - Pagination of rendered report surfaces."""

from .page_breaks import (
    plan_breaks,
    find_straddling_block,
    normalize_blocks,
    page_ranges,
)

__all__ = [
    'plan_breaks',
    'find_straddling_block',
    'normalize_blocks',
    'page_ranges',
]
