"""
Purpose:
- Pydantic models for the prompt flows so the proxy API is self-documenting and stable.
- Wire names stay camelCase (photoDataUri) to match what browser clients send.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, List

from ..core.data_uri import is_data_uri

class PhotoInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    photo_data_uri: str = Field(
        ...,
        alias="photoDataUri",
        description=(
            "A photo, as a data URI that must include a MIME type and use Base64 encoding. "
            "Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )

    @field_validator("photo_data_uri")
    @classmethod
    def _check_data_uri(cls, v: str) -> str:
        if not is_data_uri(v):
            raise ValueError("photoDataUri must look like 'data:<mimetype>;base64,<encoded_data>'")
        return v

class GenerateImageCaptionsOutput(BaseModel):
    captions: List[str] = Field(..., description="Descriptive captions, in model output order")

    @model_validator(mode="before")
    @classmethod
    def _accept_single_caption(cls, data: Any) -> Any:
        # earlier prompt revision answered {"caption": "..."}
        if isinstance(data, dict) and "captions" not in data and isinstance(data.get("caption"), str):
            return {"captions": [data["caption"]]}
        return data

    @field_validator("captions")
    @classmethod
    def _drop_blank(cls, v: List[str]) -> List[str]:
        out = [c.strip() for c in v if c and c.strip()]
        if not out:
            raise ValueError("model returned no captions")
        return out

class DescribeImageOutput(BaseModel):
    description: str = Field(..., description="A detailed description of the image")

    @field_validator("description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("model returned an empty description")
        return v

class CaptionsResponse(BaseModel):
    ok: bool = True
    captions: List[str] = []

class DescriptionResponse(BaseModel):
    ok: bool = True
    description: str = ""

class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
