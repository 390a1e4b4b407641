"""
Purpose:
- Turn the uploaded image into the data URI the prompt proxy expects.
- One read per call, off the event loop; any failure surfaces as ReadError.
"""

from __future__ import annotations
import asyncio
import logging

from ..core.data_uri import to_data_uri
from .errors import ReadError
from .intake import UploadedImage

logger = logging.getLogger(__name__)

READ_FAILED_MESSAGE = "Failed to read the image file."

async def encode(image: UploadedImage) -> str:
    try:
        raw = await asyncio.to_thread(image.source.read)
    except OSError as e:
        logger.error(f"reading {image.source.name!r} failed: {e!r}")
        raise ReadError(READ_FAILED_MESSAGE) from e

    if not raw:
        logger.error(f"reading {image.source.name!r} returned no data")
        raise ReadError(READ_FAILED_MESSAGE)

    return to_data_uri(image.mime_type, raw)
