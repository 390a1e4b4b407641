"""
Purpose:
- One ImageScribe session: select an image, run Caption or Describe, render, read aloud.
- The pipeline is encode -> request, awaited in order inside one try/except/finally,
  so every run ends in exactly one terminal state (Success or Failed).

Notes:
- Only one run at a time: a trigger while Loading is a no-op.
- Each selection and each run bumps a generation stamp; a response that arrives for an
  older generation is dropped instead of overwriting what the user is looking at.
"""

from __future__ import annotations
import logging
from typing import Optional

from ..core.settings import settings
from .encoder import encode
from .errors import ImageScribeError, ValidationError
from .intake import ImageIntake, ImageSource, PreviewUrlRegistry, UploadedImage
from .proxy_client import ProxyClient
from .renderer import ResultView, SessionSnapshot, render
from .speech import SpeechPlayback, SpeechSynthesizer
from .state import CaptionResult, DescriptionResult, Operation, RequestState

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "Please upload an image first."

class ImageScribeSession:
    def __init__(self, client: Optional[ProxyClient] = None,
                 registry: Optional[PreviewUrlRegistry] = None,
                 synthesizer: Optional[SpeechSynthesizer] = None,
                 speech: Optional[SpeechPlayback] = None,
                 caption_count: Optional[int] = None):
        self.client = client or ProxyClient()
        self.intake = ImageIntake(registry)
        self.speech = speech or SpeechPlayback(synthesizer)
        self.caption_count = caption_count or settings.caption_count
        self.state = RequestState.idle()
        self.captions: Optional[CaptionResult] = None
        self.description: Optional[DescriptionResult] = None
        self._generation = 0

    @property
    def image(self) -> Optional[UploadedImage]:
        return self.intake.current

    def _clear_results(self) -> None:
        self.captions = None
        self.description = None
        self.speech.stop()

    def select_image(self, source: ImageSource) -> Optional[UploadedImage]:
        """Swap in a new image. Returns it, or None when the file was rejected (see state.message)."""
        self._generation += 1
        self._clear_results()
        try:
            img = self.intake.select(source)
        except ValidationError as e:
            self.state = RequestState.failed(str(e))
            return None
        self.state = RequestState.idle()
        return img

    async def generate_captions(self) -> RequestState:
        return await self.run(Operation.CAPTION)

    async def describe_image(self) -> RequestState:
        return await self.run(Operation.DESCRIBE)

    async def run(self, op: Operation) -> RequestState:
        if self.state.is_loading:
            logger.debug(f"{op.key} ignored: {self.state.operation.key} still in flight")
            return self.state

        self._clear_results()
        image = self.image
        if image is None:
            self.state = RequestState.failed(NO_IMAGE_MESSAGE, op)
            return self.state

        self._generation += 1
        generation = self._generation
        self.state = RequestState.loading(op)

        outcome = RequestState.failed("An unknown error occurred.", op)
        result = None
        try:
            photo = await encode(image)
            result = await self.client.request(photo, op)
            outcome = RequestState.success(op)
        except ImageScribeError as e:
            logger.error(f"{op.key} failed: {e}")
            outcome = RequestState.failed(str(e), op)
        finally:
            if generation == self._generation:
                if result is not None:
                    if isinstance(result, CaptionResult):
                        self.captions = result
                    else:
                        self.description = result
                self.state = outcome
            else:
                logger.info(f"dropping stale {op.key} response (generation {generation}, now {self._generation})")
        return self.state

    def toggle_speech(self) -> bool:
        """Speak the description, or stop if already speaking. No-op without a description."""
        if self.description is None:
            return False
        return self.speech.toggle(self.description.text)

    def snapshot(self) -> SessionSnapshot:
        img = self.image
        return SessionSnapshot(
            state=self.state,
            preview_url=img.preview_url if img else None,
            preview_label=img.label if img else None,
            captions=self.captions,
            description=self.description,
            speaking=self.speech.speaking,
            speech_error=self.speech.error,
            caption_count=self.caption_count,
        )

    def view(self) -> ResultView:
        return render(self.snapshot())

    async def aclose(self) -> None:
        # an in-flight run sees a newer generation and leaves state alone
        self._generation += 1
        self.state = RequestState.idle()
        self.speech.close()
        self.intake.release()
        await self.client.aclose()

    async def __aenter__(self) -> "ImageScribeSession":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
