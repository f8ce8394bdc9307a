"""Voice capture and speech playback capabilities."""
from .capture import (
    CAPTURE_MESSAGES,
    CaptureBackend,
    CaptureError,
    CaptureErrorCause,
    TranscriptFragment,
    VoiceCapture,
)
from .playback import SpeechPlayback

__all__ = [
    "CAPTURE_MESSAGES",
    "CaptureBackend",
    "CaptureError",
    "CaptureErrorCause",
    "SpeechPlayback",
    "TranscriptFragment",
    "VoiceCapture",
]
