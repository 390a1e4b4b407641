"""
Purpose:
- Prompt definitions for the two flows (generate captions, describe image).
- Each prompt names its output schema; the model is asked to answer with that JSON shape.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Type
from pydantic import BaseModel

from .schema import DescribeImageOutput, GenerateImageCaptionsOutput

@dataclass(frozen=True)
class PromptDefinition:
    name: str
    system: str
    template: str                 # str.format() placeholders
    output: Type[BaseModel]

    def render(self, **params) -> str:
        return self.template.format(**params)

GENERATE_CAPTIONS_PROMPT = PromptDefinition(
    name="generateImageCaptionsPrompt",
    system="You are an AI model that generates descriptive captions for images.",
    template=(
        "Generate {count} distinct, descriptive captions for the attached image. "
        "Each caption is one sentence. "
        'Answer only with JSON of the form {{"captions": ["...", "..."]}}.'
    ),
    output=GenerateImageCaptionsOutput,
)

DESCRIBE_IMAGE_PROMPT = PromptDefinition(
    name="describeImagePrompt",
    system="You are an AI model that describes images for people who cannot see them.",
    template=(
        "Describe the attached image in detail: the subject, setting, colors, "
        "any visible text, and the overall mood. Use plain prose in one or two paragraphs. "
        'Answer only with JSON of the form {{"description": "..."}}.'
    ),
    output=DescribeImageOutput,
)
