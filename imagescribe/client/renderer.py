"""
Purpose:
- Pure state -> view mapping for one session. No I/O; any front end can draw a ResultView.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .state import CaptionResult, DescriptionResult, Operation, RequestState, Status

@dataclass(frozen=True)
class SessionSnapshot:
    state: RequestState
    preview_url: Optional[str] = None
    preview_label: Optional[str] = None
    captions: Optional[CaptionResult] = None
    description: Optional[DescriptionResult] = None
    speaking: bool = False
    speech_error: Optional[str] = None
    caption_count: int = 3

@dataclass(frozen=True)
class Placeholder:
    kind: str           # "heading" | "line" | "block"

@dataclass(frozen=True)
class ResultCard:
    title: str
    text: str

@dataclass(frozen=True)
class ErrorBanner:
    title: str
    message: str

@dataclass(frozen=True)
class SpeechControl:
    label: str          # "Read aloud" | "Stop"
    speaking: bool
    error: Optional[str] = None

@dataclass(frozen=True)
class ResultView:
    preview_url: Optional[str]
    preview_label: Optional[str]
    triggers_enabled: bool
    busy_label: Optional[str]
    placeholders: Tuple[Placeholder, ...] = ()
    cards: Tuple[ResultCard, ...] = ()
    banner: Optional[ErrorBanner] = None
    speech: Optional[SpeechControl] = None

def _placeholders(op: Optional[Operation], caption_count: int) -> Tuple[Placeholder, ...]:
    if op is Operation.CAPTION:
        return (Placeholder("heading"),) + tuple(Placeholder("line") for _ in range(caption_count))
    return (Placeholder("heading"), Placeholder("block"))

def render(snap: SessionSnapshot) -> ResultView:
    state = snap.state
    has_image = snap.preview_url is not None
    base = dict(
        preview_url=snap.preview_url,
        preview_label=snap.preview_label,
        triggers_enabled=has_image and not state.is_loading,
        busy_label=None,
    )

    if state.status is Status.LOADING:
        op = state.operation
        busy = "Generating Caption..." if op is Operation.CAPTION else "Describing Image..."
        return ResultView(**{**base, "busy_label": busy}, placeholders=_placeholders(op, snap.caption_count))

    if state.status is Status.FAILED:
        return ResultView(**base, banner=ErrorBanner(title="Error", message=state.message or ""))

    if state.status is Status.SUCCESS:
        if snap.captions is not None:
            n = len(snap.captions.captions)
            cards = tuple(
                ResultCard(title=f"Caption {i + 1}" if n > 1 else "Generated Caption", text=c)
                for i, c in enumerate(snap.captions.captions)
            )
            return ResultView(**base, cards=cards)
        if snap.description is not None:
            speech = SpeechControl(
                label="Stop" if snap.speaking else "Read aloud",
                speaking=snap.speaking,
                error=snap.speech_error,
            )
            card = ResultCard(title="Image Description", text=snap.description.text)
            return ResultView(**base, cards=(card,), speech=speech)

    return ResultView(**base)
