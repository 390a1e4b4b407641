"""
Purpose:
- Accept a file (picked by path or dropped as bytes), reject anything that is not an image,
  and keep exactly one live preview URL per session.

Notes:
- Preview URLs come from an injected PreviewUrlRegistry so the "object URL" bookkeeping
  is visible and testable instead of living in a global.
"""

from __future__ import annotations
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, Set

from .errors import ValidationError

logger = logging.getLogger(__name__)

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload an image."

@dataclass(frozen=True)
class ImageSource:
    name: str
    mime_type: str
    size: int
    read: Callable[[], bytes]   # blocking; the encoder runs it off the event loop

    @classmethod
    def from_path(cls, path: Path | str, mime_type: str | None = None) -> "ImageSource":
        p = Path(path)
        mime = mime_type or mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        size = p.stat().st_size if p.exists() else 0
        return cls(name=p.name, mime_type=mime, size=size, read=p.read_bytes)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: str) -> "ImageSource":
        return cls(name=name, mime_type=mime_type, size=len(data), read=lambda: data)

@dataclass(frozen=True)
class UploadedImage:
    source: ImageSource
    mime_type: str
    size: int
    preview_url: str

    @property
    def label(self) -> str:
        return f"{self.source.name} ({self.size / 1024:.2f} KB)"

class PreviewUrlRegistry(Protocol):
    live: Set[str]

    def create(self, source: ImageSource) -> str: ...
    def revoke(self, url: str) -> None: ...

class InMemoryPreviewUrlRegistry:
    """Issues blob:-style URLs and tracks which ones are still outstanding."""

    def __init__(self):
        self.live: Set[str] = set()

    def create(self, source: ImageSource) -> str:
        url = f"blob:imagescribe/{uuid.uuid4()}"
        self.live.add(url)
        return url

    def revoke(self, url: str) -> None:
        self.live.discard(url)

class ImageIntake:
    def __init__(self, registry: Optional[PreviewUrlRegistry] = None):
        self.registry = registry if registry is not None else InMemoryPreviewUrlRegistry()
        self.current: Optional[UploadedImage] = None

    def select(self, source: ImageSource) -> UploadedImage:
        """
        Make `source` the session's image. Raises ValidationError for non-image types and
        leaves the current image (and its preview URL) untouched in that case.
        """
        if not (source.mime_type or "").lower().startswith("image/"):
            logger.info(f"rejected {source.name!r}: {source.mime_type or 'unknown type'}")
            raise ValidationError(INVALID_TYPE_MESSAGE)

        self.release()
        url = self.registry.create(source)
        self.current = UploadedImage(source=source, mime_type=source.mime_type, size=source.size, preview_url=url)
        return self.current

    def release(self) -> None:
        if self.current is not None:
            self.registry.revoke(self.current.preview_url)
            self.current = None
