"""
Image utilities for report rendering.

Handles photo decoding, thumbnails, surface slicing and encoding.
"""
from io import BytesIO
from typing import List, Sequence, Tuple

from PIL import Image, ImageOps


def load_image_bytes(data: bytes) -> Image.Image:
    """
    Decode image bytes into an RGB PIL Image.

    EXIF orientation is applied so phone photos are upright.

    Args:
        data: Encoded image (PNG, JPEG, ...)

    Returns:
        Decoded RGB image
    """
    img = Image.open(BytesIO(data))
    img = ImageOps.exif_transpose(img)
    if img.mode != 'RGB':
        img = img.convert('RGB')
    return img


def fit_image(img: Image.Image, box: Tuple[int, int]) -> Image.Image:
    """
    Scale an image to fit inside box, keeping its aspect ratio.

    Args:
        img: Source image (not modified)
        box: (width, height) bounding box

    Returns:
        New image no larger than box
    """
    fitted = img.copy()
    fitted.thumbnail(box, Image.Resampling.LANCZOS)
    return fitted


def slice_surface(surface: Image.Image, breaks: Sequence[float]) -> List[Image.Image]:
    """
    Cut a surface into one image per consecutive pair of break offsets.

    Offsets are rounded to whole pixels.

    Args:
        surface: Rendered report surface
        breaks: Strictly increasing offsets [0, ..., surface height]

    Returns:
        Page images, top to bottom
    """
    width = surface.size[0]
    pixel_breaks = [int(round(b)) for b in breaks]

    pages = []
    for top, bottom in zip(pixel_breaks[:-1], pixel_breaks[1:]):
        if bottom <= top:
            continue
        pages.append(surface.crop((0, top, width, bottom)))
    return pages


def image_to_png_bytes(img: Image.Image) -> bytes:
    """Encode a PIL Image as PNG bytes."""
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()
