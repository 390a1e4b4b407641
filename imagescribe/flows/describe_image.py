"""
Purpose:
- describe_image(input) -> DescribeImageOutput: one prose description of the photo.
"""

from __future__ import annotations
from pydantic import ValidationError

from .errors import ModelServiceError
from .model_client import ModelClient
from .prompts import DESCRIBE_IMAGE_PROMPT
from .schema import DescribeImageOutput, PhotoInput

def describe_image(payload: PhotoInput, client: ModelClient) -> DescribeImageOutput:
    raw = client.run_prompt(DESCRIBE_IMAGE_PROMPT, payload.photo_data_uri)
    try:
        return DESCRIBE_IMAGE_PROMPT.output.model_validate(raw)
    except ValidationError as e:
        raise ModelServiceError(f"model output did not match the description schema: {e.errors()[0].get('msg')}") from e
