"""
Purpose:
- Decode an incoming photoDataUri and make sure it is a real, reasonably sized image
  before we spend a model call on it.
"""

from __future__ import annotations
from dataclasses import dataclass
from io import BytesIO
from PIL import Image, UnidentifiedImageError

from ..core.data_uri import parse_data_uri
from ..core.settings import settings
from .errors import InvalidPhotoError

@dataclass
class PhotoInfo:
    mime_type: str
    size: int           # decoded bytes
    width: int
    height: int
    format: str         # Pillow's format name, e.g. "PNG"

def inspect_photo(data_uri: str, max_bytes: int | None = None) -> PhotoInfo:
    limit = settings.max_photo_bytes if max_bytes is None else max_bytes
    try:
        mime, raw = parse_data_uri(data_uri)
    except ValueError as e:
        raise InvalidPhotoError(f"invalid photoDataUri: {e}") from e

    if not mime.startswith("image/"):
        raise InvalidPhotoError(f"photoDataUri must carry an image MIME type, got {mime!r}")
    if not raw:
        raise InvalidPhotoError("photoDataUri has an empty payload")
    if len(raw) > limit:
        raise InvalidPhotoError(f"photo is {len(raw)} bytes; limit is {limit}")

    try:
        with Image.open(BytesIO(raw)) as img:
            img.verify()
            w, h = img.size
            fmt = img.format or ""
    except Image.DecompressionBombError as e:
        raise InvalidPhotoError(f"photo dimensions are too large: {e}") from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidPhotoError(f"photo could not be decoded as an image: {e}") from e

    return PhotoInfo(mime_type=mime, size=len(raw), width=w, height=h, format=fmt)
