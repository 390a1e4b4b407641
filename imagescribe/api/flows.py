"""
Purpose:
- /api/v1/flows/* : the thin server-side proxy between the browser session and the hosted model.
- Both routes take {photoDataUri} and answer with the flow's output plus an ok flag.
- Failures come back as {ok: false, error} with 422 (bad photo) or 502 (model service).
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..flows.describe_image import describe_image
from ..flows.errors import FlowError
from ..flows.generate_captions import generate_image_captions
from ..flows.model_client import ModelClient, get_model_client
from ..flows.photo import inspect_photo
from ..flows.schema import CaptionsResponse, DescriptionResponse, ErrorResponse, PhotoInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/flows", tags=["flows"])

_ERRORS = {422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}

def _failed(kind: str, e: FlowError) -> JSONResponse:
    logger.warning(f"{kind} failed: {e}")
    return JSONResponse(status_code=e.status_code, content={"ok": False, "error": str(e)})

@router.post("/generate-image-captions", response_model=CaptionsResponse, responses=_ERRORS)
def generate_captions(payload: PhotoInput, client: ModelClient = Depends(get_model_client)):
    try:
        info = inspect_photo(payload.photo_data_uri)
        logger.info(f"captions requested for {info.format} {info.width}x{info.height} ({info.size} bytes)")
        out = generate_image_captions(payload, client)
        return CaptionsResponse(captions=out.captions)
    except FlowError as e:
        return _failed("generate-image-captions", e)

@router.post("/describe-image", response_model=DescriptionResponse, responses=_ERRORS)
def describe(payload: PhotoInput, client: ModelClient = Depends(get_model_client)):
    try:
        info = inspect_photo(payload.photo_data_uri)
        logger.info(f"description requested for {info.format} {info.width}x{info.height} ({info.size} bytes)")
        out = describe_image(payload, client)
        return DescriptionResponse(description=out.description)
    except FlowError as e:
        return _failed("describe-image", e)
