"""
Purpose:
- Value types for one session: which operation ran, what came back, and where the request stands.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

class Operation(Enum):
    CAPTION = ("caption", "Generate caption", "Failed to generate caption")
    DESCRIBE = ("describe", "Describe image", "Failed to describe image")

    def __init__(self, key: str, label: str, failure_prefix: str):
        self.key = key
        self.label = label
        self.failure_prefix = failure_prefix

class Status(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"

@dataclass(frozen=True)
class RequestState:
    status: Status = Status.IDLE
    operation: Optional[Operation] = None
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "RequestState":
        return cls()

    @classmethod
    def loading(cls, op: Operation) -> "RequestState":
        return cls(Status.LOADING, op)

    @classmethod
    def success(cls, op: Operation) -> "RequestState":
        return cls(Status.SUCCESS, op)

    @classmethod
    def failed(cls, message: str, op: Optional[Operation] = None) -> "RequestState":
        return cls(Status.FAILED, op, message)

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING

@dataclass(frozen=True)
class CaptionResult:
    captions: Tuple[str, ...]

@dataclass(frozen=True)
class DescriptionResult:
    text: str
