"""
Photo Loader - Fetches room photos for report rendering.

Photos are referenced by URL (http/https), base64 data URI or local path.
A photo that cannot be fetched or decoded is reported as missing so the
renderer can draw a placeholder; it does not fail the report.
"""
import asyncio
import base64
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import httpx
from PIL import Image, UnidentifiedImageError

from utils.image_utils import load_image_bytes

logger = logging.getLogger(__name__)


class PhotoLoader:
    """Loads photos concurrently with a shared async HTTP client."""

    def __init__(
        self,
        timeout: float = 15.0,
        max_concurrency: int = 8,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize photo loader.

        Args:
            timeout: Request timeout in seconds
            max_concurrency: Maximum simultaneous downloads
            transport: Custom httpx transport (optional)
        """
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self.transport = transport

    async def load_many(self, urls: Iterable[str]) -> Dict[str, Optional[Image.Image]]:
        """
        Load several photos.

        Args:
            urls: Photo references (duplicates are fetched once)

        Returns:
            Mapping of reference to image, or None when unavailable
        """
        unique = list(dict.fromkeys(u for u in urls if u))
        if not unique:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrency)
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self.transport
        ) as client:

            async def _bounded(url: str) -> Optional[Image.Image]:
                async with semaphore:
                    return await self._load_one(client, url)

            images = await asyncio.gather(*(_bounded(u) for u in unique))

        return dict(zip(unique, images))

    async def _load_one(self, client: httpx.AsyncClient, url: str) -> Optional[Image.Image]:
        try:
            data = await self._read_bytes(client, url)
            return load_image_bytes(data)
        except (httpx.HTTPError, OSError, ValueError, UnidentifiedImageError) as e:
            logger.warning("Photo unavailable, drawing placeholder: %s (%s)", url, e)
            return None

    async def _read_bytes(self, client: httpx.AsyncClient, url: str) -> bytes:
        if url.startswith(('http://', 'https://')):
            response = await client.get(url)
            response.raise_for_status()
            return response.content

        if url.startswith('data:'):
            _, _, payload = url.partition(',')
            return base64.b64decode(payload)

        path = Path(url[len('file://'):] if url.startswith('file://') else url)
        return await asyncio.to_thread(path.read_bytes)
