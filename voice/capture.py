"""Voice capture capability and the controller that feeds transcripts into a session.

The backend is whatever speech-to-text source the host provides. It is probed
before every start, then listened to on a background thread; final fragments
reach the sink in the order the backend emitted them, interim fragments are
kept only for display.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Iterator, Optional, Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class CaptureErrorCause(str, Enum):
    PERMISSION_DENIED = "permission-denied"
    NO_DEVICE = "no-device"
    DEVICE_BUSY = "device-busy"
    NO_SPEECH = "no-speech"
    TRANSPORT_ERROR = "transport-error"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


CAPTURE_MESSAGES = {
    CaptureErrorCause.PERMISSION_DENIED: "Microphone permission denied. Enable the microphone and try again.",
    CaptureErrorCause.NO_DEVICE: "No microphone found. Connect a microphone and try again.",
    CaptureErrorCause.DEVICE_BUSY: "The microphone is being used by another application.",
    CaptureErrorCause.NO_SPEECH: "No speech detected. Try speaking closer to the microphone.",
    CaptureErrorCause.TRANSPORT_ERROR: "Network error during transcription. Check your internet connection.",
    CaptureErrorCause.UNSUPPORTED: "Speech recognition is not supported in this environment.",
    CaptureErrorCause.UNKNOWN: "An error occurred while recording.",
}


class CaptureError(Exception):
    def __init__(self, cause: CaptureErrorCause, detail: str = "") -> None:
        super().__init__(detail or cause.value)
        self.cause = cause

    @property
    def user_message(self) -> str:
        return CAPTURE_MESSAGES.get(self.cause, CAPTURE_MESSAGES[CaptureErrorCause.UNKNOWN])


class TranscriptFragment(BaseModel):
    text: str
    is_final: bool = False


class CaptureBackend(Protocol):  # Speech-to-text source supplied by the host
    def probe(self) -> None: ...

    def listen(self, stop: threading.Event) -> Iterator[TranscriptFragment]: ...


class VoiceCapture:
    """Cancelable background consumer of a ``CaptureBackend``.

    ``sink`` receives each final fragment's text; it may refuse it (returns
    False) when the pending answer is frozen.
    """

    def __init__(
        self,
        backend: Optional[CaptureBackend],
        sink: Callable[[str], bool],
        *,
        join_timeout_s: float = 2.0,
    ) -> None:
        self._backend = backend
        self._sink = sink
        self._join_timeout_s = join_timeout_s
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.interim_text = ""
        self.last_error: Optional[CaptureError] = None

    @property
    def recording(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop.is_set()

    def start(self) -> Optional[str]:
        """Start capturing; returns a user-facing error message when it cannot."""

        if self._backend is None:
            self.last_error = CaptureError(CaptureErrorCause.UNSUPPORTED)
            return self.last_error.user_message
        self.stop()
        try:
            self._backend.probe()
        except CaptureError as exc:
            logger.warning("Microphone probe failed: %s", exc.cause.value)
            self.last_error = exc
            return exc.user_message
        with self._lock:
            self.last_error = None
            self.interim_text = ""
            self._stop = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._backend, self._stop),
                name="voice-capture",
                daemon=True,
            )
            self._thread.start()
        logger.info("Voice capture started")
        return None

    def stop(self) -> None:
        """Stop capturing; a no-op when nothing is recording."""

        with self._lock:
            thread = self._thread
            self._stop.set()
            self._thread = None
        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join(self._join_timeout_s)
        self.interim_text = ""
        logger.info("Voice capture stopped")

    def _run(self, backend: CaptureBackend, stop: threading.Event) -> None:
        try:
            for fragment in backend.listen(stop):
                if stop.is_set():
                    break
                if not fragment.is_final:
                    self.interim_text = fragment.text
                    continue
                self.interim_text = ""
                if fragment.text.strip() and not self._sink(fragment.text):
                    logger.info("Transcript fragment dropped; answer is frozen")
        except CaptureError as exc:
            logger.warning("Voice capture error: %s", exc.cause.value)
            self.last_error = exc
        except Exception as exc:  # noqa: BLE001
            logger.exception("Voice capture backend failed")
            self.last_error = CaptureError(CaptureErrorCause.UNKNOWN, str(exc))
        finally:
            stop.set()


__all__ = [
    "CAPTURE_MESSAGES",
    "CaptureBackend",
    "CaptureError",
    "CaptureErrorCause",
    "TranscriptFragment",
    "VoiceCapture",
]
