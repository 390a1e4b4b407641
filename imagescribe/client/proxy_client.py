"""
Purpose:
- Async client for the prompt proxy (/api/v1/flows/*).
- request(photo, operation) -> CaptionResult | DescriptionResult, or RequestError.

Notes:
- One call per request: no retry, and the transport's default timeout.
- Accepts both {captions: [...]} and the older {caption: "..."} answer shape.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Union
import httpx

from ..core.settings import settings
from .errors import RequestError
from .state import CaptionResult, DescriptionResult, Operation

logger = logging.getLogger(__name__)

PATHS = {
    Operation.CAPTION: "/api/v1/flows/generate-image-captions",
    Operation.DESCRIBE: "/api/v1/flows/describe-image",
}

def _error_text(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])
        detail = body.get("detail")
        if isinstance(detail, list) and detail:
            # FastAPI validation errors
            return str(detail[0].get("msg", detail[0])) if isinstance(detail[0], dict) else str(detail[0])
        if detail:
            return str(detail)
    return f"proxy returned HTTP {r.status_code}"

def _captions_from(op: Operation, body: Dict[str, Any]) -> CaptionResult:
    caps = body.get("captions")
    if caps is None and isinstance(body.get("caption"), str):
        caps = [body["caption"]]
    if not isinstance(caps, list) or not all(isinstance(c, str) for c in caps):
        raise RequestError(op, "response did not include captions")
    return CaptionResult(captions=tuple(caps))

def _description_from(op: Operation, body: Dict[str, Any]) -> DescriptionResult:
    text = body.get("description")
    if not isinstance(text, str):
        raise RequestError(op, "response did not include a description")
    return DescriptionResult(text=text)

class ProxyClient:
    def __init__(self, base_url: Optional[str] = None, transport: httpx.AsyncBaseTransport | None = None):
        self._http = httpx.AsyncClient(base_url=base_url or settings.proxy_base_url, transport=transport)

    async def request(self, photo_data_uri: str, operation: Operation) -> Union[CaptionResult, DescriptionResult]:
        try:
            r = await self._http.post(PATHS[operation], json={"photoDataUri": photo_data_uri})
        except httpx.HTTPError as e:
            raise RequestError(operation, str(e) or e.__class__.__name__) from e

        if r.status_code >= 400:
            raise RequestError(operation, _error_text(r))

        try:
            body = r.json()
        except ValueError as e:
            raise RequestError(operation, "response was not JSON") from e
        if not isinstance(body, dict):
            raise RequestError(operation, "response was not a JSON object")
        if body.get("ok") is False:
            raise RequestError(operation, str(body.get("error") or "request failed"))

        if operation is Operation.CAPTION:
            return _captions_from(operation, body)
        return _description_from(operation, body)

    async def aclose(self) -> None:
        await self._http.aclose()
