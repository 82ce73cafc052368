"""Utilities package - Helper functions for image and text processing."""

from .image_utils import (
    load_image_bytes,
    fit_image,
    slice_surface,
    image_to_png_bytes,
)

from .text_utils import (
    normalize_item_name,
    condition_label,
    describe_detection,
    format_date,
    wrap_text,
)

__all__ = [
    # Image utils
    'load_image_bytes',
    'fit_image',
    'slice_surface',
    'image_to_png_bytes',

    # Text utils
    'normalize_item_name',
    'condition_label',
    'describe_detection',
    'format_date',
    'wrap_text',
]
