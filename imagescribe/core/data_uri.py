"""
Purpose:
- Build and parse base64 data URIs: data:<mimetype>;base64,<encoded_data>
- Shared by the client encoder (build) and the prompt proxy (parse + validate).
"""

from __future__ import annotations
import base64
import binascii
import re
from typing import Tuple

DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>[A-Za-z0-9+/=\s]+)$")

def to_data_uri(mime_type: str, raw: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(raw).decode('ascii')}"

def is_data_uri(value: str) -> bool:
    return bool(DATA_URI_RE.match(value or ""))

def parse_data_uri(value: str) -> Tuple[str, bytes]:
    """
    Split a data URI into (mime_type, decoded bytes).
    Raises ValueError when the prefix is wrong or the payload is not valid base64.
    """
    m = DATA_URI_RE.match(value or "")
    if not m:
        raise ValueError("expected 'data:<mimetype>;base64,<encoded_data>'")
    try:
        raw = base64.b64decode(m.group("data"), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"payload is not valid base64: {e}") from e
    return m.group("mime").lower(), raw
