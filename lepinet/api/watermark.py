"""
Watermarked image delivery endpoint.
"""
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import Response

from lepinet.services.watermark import CACHE_CONTROL, watermark_service


router = APIRouter(prefix="/api", tags=["watermark"])


@router.get(
    "/watermark",
    response_class=Response,
    responses={200: {"content": {"image/jpeg": {}}}},
)
async def watermark_image(
    url: str = Query(..., description="Absolute http(s) URL of the source image"),
    author: Optional[str] = Query(None, description="Credit line; defaults to the generic contributor"),
):
    """
    Fetch an image and return it as JPEG with the LepiNet credit in the
    bottom-right corner.

    Raises:
        413: Source image too large
        422: Missing or invalid url, or the source is not an image
        502: Source image could not be fetched
    """
    image = await watermark_service.watermark_url(url, author)
    return Response(
        content=image,
        media_type="image/jpeg",
        headers={"Cache-Control": CACHE_CONTROL},
    )
