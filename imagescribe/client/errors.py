"""
Purpose:
- Client-side failure taxonomy. Each one ends the current operation only; the session
  turns it into a visible message and goes back to an interactive state.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Operation

class ImageScribeError(Exception):
    """Base class; str(err) is the user-facing message."""

class ValidationError(ImageScribeError):
    """Selected file is not an image (or nothing is selected)."""

class ReadError(ImageScribeError):
    """The selected file could not be read into a data URI."""

class RequestError(ImageScribeError):
    """The prompt proxy call failed; `message` is the wrapped reason, shown verbatim."""

    def __init__(self, operation: "Operation", message: str):
        super().__init__(f"{operation.failure_prefix}: {message}")
        self.operation = operation
        self.message = message

class SpeechError(ImageScribeError):
    """No speech engine on this platform, or the engine reported a failure."""
