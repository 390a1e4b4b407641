"""
Purpose:
- AI-powered image caption generator.
- generate_image_captions(input) -> GenerateImageCaptionsOutput (ordered list of captions).
"""

from __future__ import annotations
import logging
from pydantic import ValidationError

from ..core.settings import settings
from .errors import ModelServiceError
from .model_client import ModelClient
from .prompts import GENERATE_CAPTIONS_PROMPT
from .schema import GenerateImageCaptionsOutput, PhotoInput

logger = logging.getLogger(__name__)

def generate_image_captions(payload: PhotoInput, client: ModelClient, count: int | None = None) -> GenerateImageCaptionsOutput:
    n = count or settings.caption_count
    raw = client.run_prompt(GENERATE_CAPTIONS_PROMPT, payload.photo_data_uri, count=n)
    try:
        out = GENERATE_CAPTIONS_PROMPT.output.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"caption output rejected: {e.errors()[0].get('msg')}")
        raise ModelServiceError(f"model output did not match the caption schema: {e.errors()[0].get('msg')}") from e
    # the model is asked for n; it sometimes volunteers more
    return GenerateImageCaptionsOutput(captions=out.captions[:n])
