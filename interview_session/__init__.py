"""Interview session state machine and its data model."""
from .interview_session import (
    BUSY_MESSAGE,
    EMPTY_ANSWER_MESSAGE,
    PLAYBACK_UNSUPPORTED_MESSAGE,
    EvaluationBackend,
    InterviewSession,
    InterviewStateError,
)
from .models import (
    FOLLOW_UP_CATEGORY,
    Answer,
    InterviewConfig,
    InterviewMode,
    Question,
    SessionPhase,
    SessionState,
    SessionSummary,
    SubmissionResult,
)

__all__ = [
    "Answer",
    "BUSY_MESSAGE",
    "EMPTY_ANSWER_MESSAGE",
    "EvaluationBackend",
    "FOLLOW_UP_CATEGORY",
    "InterviewConfig",
    "InterviewMode",
    "InterviewSession",
    "InterviewStateError",
    "PLAYBACK_UNSUPPORTED_MESSAGE",
    "Question",
    "SessionPhase",
    "SessionState",
    "SessionSummary",
    "SubmissionResult",
]
