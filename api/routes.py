"""FastAPI routes driving the single in-process interview session."""
from __future__ import annotations

from threading import RLock
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from api.schemas import AnswerReq, AnswerResp, HealthResp, NoticeResp, SpeakReq, StartReq
from config import Settings
from interview_evaluation import EvaluationService
from interview_session import InterviewConfig, InterviewSession, InterviewStateError, SessionState, SessionSummary


router = APIRouter(prefix="/api/interview")


class SessionHolder:
    """Process-scoped owner of the evaluation service and the current session."""

    def __init__(self, service: Optional[EvaluationService] = None, settings: Optional[Settings] = None) -> None:
        self._service = service
        self.settings = settings
        self._session: Optional[InterviewSession] = None
        self._lock = RLock()

    @property
    def service(self) -> EvaluationService:
        with self._lock:
            if self._service is None:
                self._service = EvaluationService()
            return self._service

    @property
    def session(self) -> Optional[InterviewSession]:
        return self._session

    def replace(self, session: Optional[InterviewSession]) -> None:
        with self._lock:
            previous = self._session
            self._session = session
        if previous is not None and previous is not session:
            previous.return_to_setup()

    def require(self) -> InterviewSession:
        session = self._session
        if session is None or session.closed:
            raise HTTPException(
                status_code=400,
                detail="No active interview session. Please start an interview first.",
            )
        return session


_holder = SessionHolder()


def get_holder() -> SessionHolder:
    return _holder


def _conflict(exc: InterviewStateError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(exc))


@router.get("/health", response_model=HealthResp)
def health(holder: SessionHolder = Depends(get_holder)) -> HealthResp:
    session = holder.session
    return HealthResp(
        status="running",
        offline=holder.service.offline,
        active_session=session is not None and not session.closed,
    )


@router.post("/start", response_model=SessionState)
def start(req: StartReq, holder: SessionHolder = Depends(get_holder)) -> SessionState:
    try:
        config = InterviewConfig(**req.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    session = InterviewSession(config, holder.service, settings=holder.settings)
    holder.replace(session)
    return session.load_questions()


@router.get("/state", response_model=SessionState)
def state(holder: SessionHolder = Depends(get_holder)) -> SessionState:
    session = holder.require()
    try:
        return session.state()
    except InterviewStateError as exc:
        raise _conflict(exc) from exc


@router.post("/answer", response_model=AnswerResp)
def answer(req: AnswerReq, holder: SessionHolder = Depends(get_holder)) -> AnswerResp:
    session = holder.require()
    try:
        result = session.submit_answer(req.text)
        return AnswerResp(**result.model_dump(), state=session.state())
    except InterviewStateError as exc:
        raise _conflict(exc) from exc


@router.post("/next", response_model=SessionState)
def next_question(holder: SessionHolder = Depends(get_holder)) -> SessionState:
    session = holder.require()
    try:
        return session.next_question()
    except InterviewStateError as exc:
        raise _conflict(exc) from exc


@router.post("/speak", response_model=NoticeResp)
def speak(req: SpeakReq, holder: SessionHolder = Depends(get_holder)) -> NoticeResp:
    session = holder.require()
    try:
        return NoticeResp(message=session.speak_question(req.locale))
    except InterviewStateError as exc:
        raise _conflict(exc) from exc


@router.get("/summary", response_model=SessionSummary)
def summary(holder: SessionHolder = Depends(get_holder)) -> SessionSummary:
    session = holder.require()
    try:
        return session.summary()
    except InterviewStateError as exc:
        raise _conflict(exc) from exc


@router.post("/return-to-setup", response_model=NoticeResp)
def return_to_setup(holder: SessionHolder = Depends(get_holder)) -> NoticeResp:
    holder.replace(None)
    return NoticeResp(message="Back to setup.")
