from __future__ import annotations  # Interview session data models

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from interview_evaluation import Feedback

InterviewMode = Literal["quick", "complete"]
SessionPhase = Literal["loading-questions", "active", "completed"]

FOLLOW_UP_CATEGORY = "Follow-up"
INTRODUCTION_CATEGORY = "Introduction"
TECHNICAL_CATEGORY = "Technical"


class InterviewConfig(BaseModel):  # Setup chosen by the candidate; frozen for the session
    model_config = ConfigDict(frozen=True)

    mode: InterviewMode = "quick"
    area: str
    experience_level: str
    candidate_name: str
    job_description: Optional[str] = None

    @field_validator("area", "experience_level", "candidate_name")
    @classmethod
    def _require_text(cls, value: str) -> str:  # Reject blank setup fields
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class Question(BaseModel):  # Question shown to the candidate
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    text: str = Field(min_length=1)
    category: str


class Answer(BaseModel):  # Submitted answer with its evaluation
    model_config = ConfigDict(frozen=True)

    question_id: int = Field(ge=1)
    text: str = Field(min_length=1)
    feedback: Optional[Feedback] = None


class SessionState(BaseModel):  # Snapshot of the state machine
    session_id: str
    phase: SessionPhase
    questions: List[Question] = Field(default_factory=list)
    answers: List[Answer] = Field(default_factory=list)
    current_index: int = Field(default=0, ge=0)
    target_question_count: int = Field(ge=1)
    terminal: bool = False
    processing: bool = False
    showing_feedback: bool = False
    current_answer: str = ""
    progress: float = 0.0
    offline_notice: Optional[str] = None
    events: List[Dict[str, Any]] = Field(default_factory=list)


class SessionSummary(BaseModel):  # Final result shown on completion
    candidate_name: str
    area: str
    experience_level: str
    answered_count: int = Field(ge=0)
    average_score: int = Field(ge=0, le=100)


class SubmissionResult(BaseModel):  # Outcome of an answer submission
    accepted: bool
    message: Optional[str] = None
    feedback: Optional[Feedback] = None


__all__ = [
    "Answer",
    "FOLLOW_UP_CATEGORY",
    "INTRODUCTION_CATEGORY",
    "InterviewConfig",
    "InterviewMode",
    "Question",
    "SessionPhase",
    "SessionState",
    "SessionSummary",
    "SubmissionResult",
    "TECHNICAL_CATEGORY",
]
