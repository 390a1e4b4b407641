"""
Purpose:
- Read the image description aloud, with a single speak/stop toggle.
- The engine is an injected SpeechSynthesizer; the default wraps pyttsx3 (offline TTS).

Notes:
- Failures are soft: they land in SpeechPlayback.error and never raise to the caller.
- Starting a new utterance always cancels whatever is still queued.
"""

from __future__ import annotations
import itertools
import logging
import queue
import threading
from typing import Any, Callable, Dict, Optional, Protocol, Tuple
import pyttsx3

from ..core.settings import settings
from .errors import SpeechError

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Sorry, your platform does not support text-to-speech."

class SpeechSynthesizer(Protocol):
    def speak(self, text: str, on_done: Callable[[], None], on_error: Callable[[str], None]) -> None: ...
    def cancel(self) -> None: ...
    def close(self) -> None: ...

class Pyttsx3Synthesizer:
    """
    One pyttsx3 engine, owned by one worker thread for its whole life.
    speak()/cancel() only post requests; init, say, stop and the run loop all happen on the worker,
    which is what the sapi5/nsss drivers require.
    """

    POLL_S = 0.05

    def __init__(self, rate: int | None = None, volume: float | None = None,
                 engine_factory: Callable[[], Any] = pyttsx3.init):
        self._rate = rate if rate is not None else settings.speech_rate
        self._volume = volume if volume is not None else settings.speech_volume
        self._requests: "queue.Queue[Tuple[str, Any]]" = queue.Queue()
        self._pending: Dict[str, Tuple[Callable[[], None], Callable[[str], None]]] = {}  # worker-only
        self._names = itertools.count(1)
        self._ready = threading.Event()
        self._init_error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, args=(engine_factory,), name="imagescribe-speech", daemon=True)
        self._thread.start()
        self._ready.wait()
        if isinstance(self._init_error, (ImportError, RuntimeError, OSError)):
            # no driver (espeak / nsss / sapi5) on this host
            raise SpeechError(UNSUPPORTED_MESSAGE) from self._init_error
        if self._init_error is not None:
            raise self._init_error

    def speak(self, text: str, on_done: Callable[[], None], on_error: Callable[[str], None]) -> None:
        self._requests.put(("speak", (f"utterance-{next(self._names)}", text, on_done, on_error)))

    def cancel(self) -> None:
        self._requests.put(("stop", None))

    def close(self) -> None:
        if self._thread.is_alive():
            self._requests.put(("close", None))
            self._thread.join(timeout=2.0)

    def _on_finished(self, name: str, completed: bool) -> None:
        callbacks = self._pending.pop(name, None)
        if callbacks is not None:
            callbacks[0]()

    def _fail_pending(self, message: str) -> None:
        pending = list(self._pending.values())
        self._pending.clear()
        for _on_done, on_error in pending:
            on_error(message)

    def _run(self, engine_factory: Callable[[], Any]) -> None:
        try:
            engine = engine_factory()
            engine.setProperty("rate", self._rate)
            engine.setProperty("volume", self._volume)
            engine.connect("finished-utterance", self._on_finished)
            engine.startLoop(False)
        except Exception as e:
            # handed back to the constructor on the caller thread
            self._init_error = e
            return
        finally:
            self._ready.set()

        try:
            while True:
                try:
                    kind, payload = self._requests.get(timeout=self.POLL_S)
                except queue.Empty:
                    kind, payload = None, None

                if kind == "close":
                    break
                if kind == "stop":
                    self._pending.clear()
                    engine.stop()
                elif kind == "speak":
                    name, text, on_done, on_error = payload
                    self._pending[name] = (on_done, on_error)
                    engine.say(text, name)

                try:
                    engine.iterate()
                except RuntimeError as e:
                    logger.error(f"speech engine loop failed: {e!r}")
                    self._fail_pending(f"Speech synthesis failed: {e}")
        finally:
            engine.endLoop()

class SpeechPlayback:
    def __init__(self, synthesizer: Optional[SpeechSynthesizer] = None,
                 factory: Callable[[], SpeechSynthesizer] = Pyttsx3Synthesizer):
        self._synth = synthesizer
        self._factory = factory
        self._lock = threading.Lock()
        self._utterance = 0         # bumps on every start/stop; stale callbacks are ignored
        self.speaking = False
        self.error: Optional[str] = None

    def _engine(self) -> Optional[SpeechSynthesizer]:
        if self._synth is None:
            try:
                self._synth = self._factory()
            except SpeechError as e:
                logger.warning(f"speech unavailable: {e.__cause__ or e}")
                self.error = str(e)
                return None
        return self._synth

    def toggle(self, text: str) -> bool:
        """Stop if speaking, otherwise start speaking `text`. Returns the new speaking flag."""
        if self.speaking:
            self.stop()
            return False

        self.error = None
        synth = self._engine()
        if synth is None:
            return False

        with self._lock:
            self._utterance += 1
            token = self._utterance
            self.speaking = True
        try:
            synth.cancel()
            synth.speak(text, on_done=lambda: self._finished(token), on_error=lambda msg: self._failed(token, msg))
        except SpeechError as e:
            self._failed(token, str(e))
        return self.speaking

    def stop(self) -> None:
        with self._lock:
            self._utterance += 1
            was_speaking = self.speaking
            self.speaking = False
        if was_speaking and self._synth is not None:
            self._synth.cancel()

    def close(self) -> None:
        self.stop()
        if self._synth is not None:
            self._synth.close()

    def _finished(self, token: int) -> None:
        with self._lock:
            if token == self._utterance:
                self.speaking = False

    def _failed(self, token: int, message: str) -> None:
        with self._lock:
            if token != self._utterance:
                return
            self.speaking = False
            self.error = message
        logger.error(f"speech failed: {message}")
