"""Speech playback capability."""
from __future__ import annotations

from typing import Protocol


class SpeechPlayback(Protocol):  # Text-to-speech sink; return value is ignored
    def speak(self, text: str, locale: str) -> None: ...


__all__ = ["SpeechPlayback"]
