"""
On-demand image watermarking.

Fetches a source image, stamps a semi-transparent LepiNet credit in the
bottom-right corner and re-encodes it as JPEG.
"""
from io import BytesIO
from typing import Optional
from urllib.parse import urlparse

import httpx
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from lepinet.core.config import settings
from lepinet.core.logging import logger, log_info
from lepinet.core.exceptions import (
    InvalidArgumentException,
    PayloadTooLargeException,
    UpstreamUnavailableException,
)

# Overlay geometry (pixels) and text opacity (0-255)
OVERLAY_WIDTH = 500
OVERLAY_HEIGHT = 100
TITLE_SIZE = 30
SUBTITLE_SIZE = 14
TITLE_ALPHA = 128  # 50%
SUBTITLE_ALPHA = 77  # 30%

CACHE_CONTROL = "public, max-age=31536000, immutable"


class WatermarkService:
    """
    Fetch and watermark images.

    `transport` lets tests (or a proxy setup) swap the httpx transport used
    for fetching source images.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    @staticmethod
    def validate_url(url: str) -> str:
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidArgumentException(
                "Image URL must be an absolute http(s) URL", details={"url": url}
            )
        return url

    async def fetch_image(self, url: str) -> bytes:
        """
        Download the source image.

        Raises:
            InvalidArgumentException: Not an http(s) URL
            PayloadTooLargeException: Image exceeds WATERMARK_MAX_BYTES
            UpstreamUnavailableException: Network error or non-2xx response
        """
        self.validate_url(url)
        max_bytes = settings.WATERMARK_MAX_BYTES
        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=settings.WATERMARK_FETCH_TIMEOUT,
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    declared = response.headers.get("content-length", "")
                    if declared.isdigit() and int(declared) > max_bytes:
                        raise PayloadTooLargeException(
                            "Source image is too large",
                            details={"size": int(declared), "max_bytes": max_bytes},
                        )

                    # Content-Length can be absent or wrong; count what arrives
                    received = 0
                    chunks = []
                    async for chunk in response.aiter_bytes():
                        received += len(chunk)
                        if received > max_bytes:
                            raise PayloadTooLargeException(
                                "Source image is too large",
                                details={"received": received, "max_bytes": max_bytes},
                            )
                        chunks.append(chunk)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Source image request rejected",
                extra={"url": url, "status_code": e.response.status_code},
            )
            raise UpstreamUnavailableException(
                "Source image could not be fetched",
                details={"url": url, "status_code": e.response.status_code},
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Source image fetch failed",
                extra={"url": url, "error_type": type(e).__name__},
            )
            raise UpstreamUnavailableException(
                "Source image could not be fetched", details={"url": url}
            )

        return b"".join(chunks)

    @staticmethod
    def render(
        image_bytes: bytes,
        author: str,
        brand: Optional[str] = None,
        quality: Optional[int] = None,
    ) -> bytes:
        """
        Composite the credit overlay onto the image and return JPEG bytes.

        Raises:
            InvalidArgumentException: Bytes are not a decodable image
            PayloadTooLargeException: Image dimensions trip Pillow's bomb guard
        """
        brand = brand or settings.WATERMARK_BRAND
        quality = quality or settings.WATERMARK_JPEG_QUALITY

        try:
            with Image.open(BytesIO(image_bytes)) as source:
                base = source.convert("RGBA")
        except Image.DecompressionBombError:
            raise PayloadTooLargeException("Source image dimensions are too large")
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidArgumentException(
                "Source is not a readable image", details={"error": str(e)}
            )

        # Smaller images get a cropped overlay rather than an error
        overlay_w = min(OVERLAY_WIDTH, base.width)
        overlay_h = min(OVERLAY_HEIGHT, base.height)

        overlay = Image.new("RGBA", (overlay_w, overlay_h), (255, 255, 255, 0))
        draw = ImageDraw.Draw(overlay)
        title_font = ImageFont.load_default(size=TITLE_SIZE)
        subtitle_font = ImageFont.load_default(size=SUBTITLE_SIZE)
        # Roughly the y=50 and y=80 baselines of the 500x100 credit box
        draw.text((20, 50 - TITLE_SIZE), brand, font=title_font, fill=(255, 255, 255, TITLE_ALPHA))
        draw.text(
            (20, 80 - SUBTITLE_SIZE),
            f"© {author}",
            font=subtitle_font,
            fill=(255, 255, 255, SUBTITLE_ALPHA),
        )

        base.alpha_composite(overlay, dest=(base.width - overlay_w, base.height - overlay_h))

        output = BytesIO()
        base.convert("RGB").save(output, format="JPEG", quality=quality)
        return output.getvalue()

    async def watermark_url(self, url: str, author: Optional[str] = None) -> bytes:
        author = (author or "").strip() or settings.WATERMARK_DEFAULT_AUTHOR
        image_bytes = await self.fetch_image(url)
        rendered = self.render(image_bytes, author)

        log_info(
            "Image watermarked",
            url=url,
            source_bytes=len(image_bytes),
            output_bytes=len(rendered),
        )
        return rendered


# Global singleton instance
watermark_service = WatermarkService()
