from __future__ import annotations  # Interview session state machine

import logging
import math
from threading import RLock
from typing import List, Optional, Protocol, Tuple
from uuid import uuid4

from config import Settings, settings as default_settings
from interview_evaluation import Feedback, default_session_questions, offline_feedback
from observability import log_event, span
from voice import CaptureBackend, SpeechPlayback, VoiceCapture

from .models import (
    FOLLOW_UP_CATEGORY,
    INTRODUCTION_CATEGORY,
    TECHNICAL_CATEGORY,
    Answer,
    InterviewConfig,
    Question,
    SessionPhase,
    SessionState,
    SessionSummary,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

EMPTY_ANSWER_MESSAGE = "Please provide an answer before continuing."
BUSY_MESSAGE = "Your previous answer is still being evaluated."
SESSION_CLOSED_MESSAGE = "The interview session has ended."
PLAYBACK_UNSUPPORTED_MESSAGE = "Speech playback is not supported in this environment."
PLAYBACK_FAILED_MESSAGE = "The question could not be read aloud."


class EvaluationBackend(Protocol):  # Operations the session needs from the evaluation service
    @property
    def notice(self) -> Optional[str]: ...

    def generate_questions(
        self,
        area: str,
        experience_level: str,
        count: int,
        job_description: Optional[str] = None,
    ) -> List[str]: ...

    def evaluate_answer(self, question: str, answer_text: str, area: str) -> Feedback: ...

    def generate_follow_up(self, previous_question: str, candidate_answer: str, area: str) -> str: ...


class InterviewStateError(RuntimeError):  # Action not allowed in the current phase
    pass


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class InterviewSession:
    """Drives one interview from question loading to the final summary.

    Phases are ``loading-questions``, ``active`` and ``completed``. Questions
    and answers are only ever appended; every answer carries its feedback
    before the session moves past its question.
    """

    def __init__(
        self,
        config: InterviewConfig,
        service: EvaluationBackend,
        *,
        settings: Optional[Settings] = None,
        playback: Optional[SpeechPlayback] = None,
        capture_backend: Optional[CaptureBackend] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.session_id = session_id or str(uuid4())
        self.config = config
        self._service = service
        self._settings = settings or default_settings
        self._playback = playback
        self._lock = RLock()
        self.target_question_count = self._settings.question_target(config.mode)
        self.phase: SessionPhase = "loading-questions"
        self._questions: List[Question] = []
        self._answers: List[Answer] = []
        self.current_index = 0
        self.processing = False
        self.showing_feedback = False
        self.current_answer = ""
        self.events: List[dict] = []
        self._closed = False
        self.capture = VoiceCapture(capture_backend, self.append_transcript)
        log_event(
            "session_created",
            self.session_id,
            phase=self.phase,
            mode=config.mode,
            area=config.area,
            target=self.target_question_count,
        )

    # ------------------------------------------------------------------ views

    @property
    def questions(self) -> Tuple[Question, ...]:
        return tuple(self._questions)

    @property
    def answers(self) -> Tuple[Answer, ...]:
        return tuple(self._answers)

    @property
    def terminal(self) -> bool:
        return self.phase == "completed"

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def offline_notice(self) -> Optional[str]:
        return self._service.notice

    @property
    def current_question(self) -> Optional[Question]:
        if self.phase != "active" or not self._questions:
            return None
        return self._questions[self.current_index]

    @property
    def progress(self) -> float:
        if not self._questions:
            return 0.0
        denominator = min(self.target_question_count, len(self._questions))
        return min(100.0, (self.current_index + 1) / denominator * 100)

    def state(self) -> SessionState:
        with self._lock:
            self._ensure_open()
            return SessionState(
                session_id=self.session_id,
                phase=self.phase,
                questions=list(self._questions),
                answers=list(self._answers),
                current_index=self.current_index,
                target_question_count=self.target_question_count,
                terminal=self.terminal,
                processing=self.processing,
                showing_feedback=self.showing_feedback,
                current_answer=self.current_answer,
                progress=self.progress,
                offline_notice=self.offline_notice,
                events=list(self.events),
            )

    # ---------------------------------------------------------------- loading

    def load_questions(self) -> SessionState:
        """Fetch the opening questions and enter ``active``; never fails outward."""

        with self._lock:
            self._ensure_open()
            if self.phase != "loading-questions":
                raise InterviewStateError(f"Questions already loaded (phase={self.phase})")
        cfg = self.config
        try:
            with span(self, "generate_questions") as entry:
                texts = self._service.generate_questions(
                    cfg.area,
                    cfg.experience_level,
                    self.target_question_count,
                    cfg.job_description,
                )
                entry["count"] = len(texts)
        except Exception as exc:  # noqa: BLE001
            logger.error("Question loading failed; using default questions: %s", exc)
            texts = []
        texts = [text.strip() for text in texts if isinstance(text, str) and text.strip()]
        with self._lock:
            self._ensure_open()
            if texts:
                self._questions = [
                    Question(
                        id=index + 1,
                        text=text,
                        category=INTRODUCTION_CATEGORY if index == 0 else TECHNICAL_CATEGORY,
                    )
                    for index, text in enumerate(texts[: self.target_question_count])
                ]
                source = "generated"
            else:
                defaults = default_session_questions(cfg.candidate_name, cfg.area)
                self._questions = [
                    Question(id=index + 1, text=text, category=category)
                    for index, (text, category) in enumerate(defaults[: self.target_question_count])
                ]
                source = "default"
            self.current_index = 0
            self.phase = "active"
            log_event(
                "questions_loaded",
                self.session_id,
                phase=self.phase,
                source=source,
                count=len(self._questions),
            )
            return self.state()

    # ----------------------------------------------------------- answer input

    def set_answer_text(self, text: str) -> bool:
        """Replace the pending answer; refused while it is frozen."""

        with self._lock:
            if not self._answer_editable():
                return False
            self.current_answer = text
            return True

    def append_transcript(self, fragment: str) -> bool:
        """Append a final transcript fragment, space separated."""

        with self._lock:
            if not self._answer_editable():
                return False
            current = self.current_answer.rstrip()
            self.current_answer = f"{current} {fragment}" if current else fragment
            return True

    def start_recording(self) -> Optional[str]:
        with self._lock:
            self._ensure_phase("active")
        return self.capture.start()

    def stop_recording(self) -> None:
        self.capture.stop()

    def speak_question(self, locale: Optional[str] = None) -> Optional[str]:
        """Read the current question aloud; returns a notice when it cannot."""

        question = self.current_question
        if question is None:
            raise InterviewStateError("No question to read")
        if self._playback is None:
            return PLAYBACK_UNSUPPORTED_MESSAGE
        try:
            self._playback.speak(question.text, locale or self._settings.PLAYBACK_LOCALE)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Speech playback failed: %s", exc)
            return PLAYBACK_FAILED_MESSAGE
        return None

    # ------------------------------------------------------------- submission

    def submit_answer(self, text: Optional[str] = None) -> SubmissionResult:
        """Evaluate the pending answer for the current question.

        Empty answers and re-entrant submissions are rejected without any
        state change.
        """

        with self._lock:
            self._ensure_phase("active")
            if self.processing:
                return SubmissionResult(accepted=False, message=BUSY_MESSAGE)
            question = self._questions[self.current_index]
            if self._answered(question.id):
                raise InterviewStateError(f"Question {question.id} has already been answered")
            candidate = self.current_answer if text is None else text
            answer_text = candidate.strip()
            if not answer_text:
                return SubmissionResult(accepted=False, message=EMPTY_ANSWER_MESSAGE)
            self.current_answer = candidate
            self.processing = True

        try:
            with span(self, "evaluate_answer") as entry:
                feedback = self._service.evaluate_answer(question.text, answer_text, self.config.area)
                entry["score"] = feedback.score
        except Exception as exc:  # noqa: BLE001
            logger.error("Answer evaluation failed; using heuristic feedback: %s", exc)
            feedback = offline_feedback(answer_text, "unavailable")

        with self._lock:
            self.processing = False
            if self._closed:
                return SubmissionResult(accepted=False, message=SESSION_CLOSED_MESSAGE)
            self._answers.append(Answer(question_id=question.id, text=answer_text, feedback=feedback))
            self.showing_feedback = True
            log_event(
                "answer_evaluated",
                self.session_id,
                question_id=question.id,
                score=feedback.score,
                answered=len(self._answers),
            )
            return SubmissionResult(accepted=True, message=self.offline_notice, feedback=feedback)

    # ------------------------------------------------------------- transition

    def next_question(self) -> SessionState:
        """Advance to a pre-built question, a generated follow-up, or completion."""

        state = self._next_question()
        if state.terminal:
            self.capture.stop()
        return state

    def _next_question(self) -> SessionState:
        with self._lock:
            self._ensure_phase("active")
            if self.processing:
                raise InterviewStateError("A request is already in progress")
            current = self._questions[self.current_index]
            if not self._answered(current.id):
                raise InterviewStateError(f"Question {current.id} has not been answered yet")
            next_index = self.current_index + 1
            self.current_answer = ""
            self.showing_feedback = False
            if next_index < self.target_question_count and next_index < len(self._questions):
                self._advance_to(next_index, source="prepared")
                return self.state()
            if next_index >= self.target_question_count:
                self._complete(reason="question_limit_reached")
                return self.state()
            last_answer = self._answers[-1]
            self.processing = True

        try:
            with span(self, "generate_follow_up"):
                text = self._service.generate_follow_up(current.text, last_answer.text, self.config.area)
            text = (text or "").strip()
            if not text:
                raise ValueError("Follow-up generation returned no text")
        except Exception as exc:  # noqa: BLE001
            logger.error("Follow-up generation failed; completing session: %s", exc)
            with self._lock:
                self.processing = False
                if not self._closed:
                    self._complete(reason="follow_up_failed")
                    return self.state()
            raise InterviewStateError(SESSION_CLOSED_MESSAGE) from exc

        with self._lock:
            self.processing = False
            self._ensure_open()
            self._questions.append(
                Question(id=len(self._questions) + 1, text=text, category=FOLLOW_UP_CATEGORY)
            )
            self._advance_to(next_index, source="follow_up")
            return self.state()

    # -------------------------------------------------------------- completed

    def summary(self) -> SessionSummary:
        with self._lock:
            self._ensure_phase("completed")
            scores = [answer.feedback.score for answer in self._answers if answer.feedback is not None]
            average = _round_half_up(sum(scores) / len(scores)) if scores else 0
            return SessionSummary(
                candidate_name=self.config.candidate_name,
                area=self.config.area,
                experience_level=self.config.experience_level,
                answered_count=len(self._answers),
                average_score=average,
            )

    def return_to_setup(self) -> None:
        """Tear the session down and discard everything it collected."""

        self.capture.stop()
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._questions = []
            self._answers = []
            self.current_index = 0
            self.current_answer = ""
            self.showing_feedback = False
            log_event("session_discarded", self.session_id, phase=self.phase)

    # ---------------------------------------------------------------- helpers

    def _ensure_open(self) -> None:
        if self._closed:
            raise InterviewStateError(SESSION_CLOSED_MESSAGE)

    def _ensure_phase(self, phase: SessionPhase) -> None:
        self._ensure_open()
        if self.phase != phase:
            raise InterviewStateError(f"Action requires phase {phase}, session is {self.phase}")

    def _answer_editable(self) -> bool:
        return not self._closed and self.phase == "active" and not self.processing and not self.showing_feedback

    def _answered(self, question_id: int) -> bool:
        return any(answer.question_id == question_id for answer in self._answers)

    def _advance_to(self, index: int, *, source: str) -> None:
        self.current_index = index
        self.current_answer = ""
        self.showing_feedback = False
        log_event(
            "question_advanced",
            self.session_id,
            index=index,
            question_id=self._questions[index].id,
            source=source,
        )

    def _complete(self, *, reason: str) -> None:
        self.phase = "completed"
        self.current_answer = ""
        self.showing_feedback = False
        scores = [answer.feedback.score for answer in self._answers if answer.feedback is not None]
        log_event(
            "session_completed",
            self.session_id,
            phase=self.phase,
            cause=reason,
            answered=len(self._answers),
            average=_round_half_up(sum(scores) / len(scores)) if scores else 0,
        )


__all__ = [
    "BUSY_MESSAGE",
    "EMPTY_ANSWER_MESSAGE",
    "EvaluationBackend",
    "InterviewSession",
    "InterviewStateError",
    "PLAYBACK_UNSUPPORTED_MESSAGE",
]
