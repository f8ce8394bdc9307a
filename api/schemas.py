"""Pydantic schemas for the interview session API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from interview_evaluation import Feedback
from interview_session import InterviewMode, SessionState


class StartReq(BaseModel):
    mode: InterviewMode = "quick"
    area: str
    experience_level: str
    candidate_name: str
    job_description: Optional[str] = None


class AnswerReq(BaseModel):
    text: Optional[str] = None


class SpeakReq(BaseModel):
    locale: Optional[str] = None


class AnswerResp(BaseModel):
    accepted: bool
    message: Optional[str] = None
    feedback: Optional[Feedback] = None
    state: SessionState


class NoticeResp(BaseModel):
    message: Optional[str] = None


class HealthResp(BaseModel):
    status: str
    offline: bool
    active_session: bool
