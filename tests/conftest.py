import sys
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import LlmRoute, Settings
from interview_evaluation import Feedback
from interview_session import InterviewConfig
from voice import CaptureError, TranscriptFragment


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def chat_payload(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeHttpClient:
    """Replays queued chat-completion contents; an Exception entry is raised instead."""

    def __init__(self, *replies: Any) -> None:
        self.replies: List[Any] = list(replies)
        self.requests: List[Dict[str, Any]] = []

    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> FakeResponse:
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, FakeResponse):
            return reply
        return FakeResponse(200, chat_payload(reply))


class FakeService:
    """In-memory stand-in for EvaluationService."""

    def __init__(
        self,
        questions: Optional[List[str]] = None,
        scores: Optional[List[int]] = None,
        follow_ups: Optional[List[str]] = None,
        follow_up_error: Optional[Exception] = None,
        notice: Optional[str] = None,
    ) -> None:
        self.questions = list(questions or [])
        self.scores = list(scores or [])
        self.follow_ups = list(follow_ups or [])
        self.follow_up_error = follow_up_error
        self.notice = notice
        self.calls: List[tuple] = []

    def generate_questions(self, area, experience_level, count, job_description=None):
        self.calls.append(("generate_questions", area, experience_level, count))
        return self.questions[:count]

    def evaluate_answer(self, question, answer_text, area):
        self.calls.append(("evaluate_answer", question, answer_text))
        score = self.scores.pop(0) if self.scores else 70
        return Feedback(
            score=score,
            strengths=["Clear structure"],
            improvements=["Add measurable results"],
            overall="Solid answer with room for more depth.",
        )

    def generate_follow_up(self, previous_question, candidate_answer, area):
        self.calls.append(("generate_follow_up", previous_question, candidate_answer))
        if self.follow_up_error is not None:
            raise self.follow_up_error
        return self.follow_ups.pop(0) if self.follow_ups else "What would you do differently next time?"


class ScriptedCaptureBackend:
    """Emits a fixed fragment script, then sets ``done``."""

    def __init__(
        self,
        fragments: Optional[List[TranscriptFragment]] = None,
        probe_error: Optional[CaptureError] = None,
        listen_error: Optional[CaptureError] = None,
    ) -> None:
        self.fragments = list(fragments or [])
        self.probe_error = probe_error
        self.listen_error = listen_error
        self.probes = 0
        self.done = threading.Event()

    def probe(self) -> None:
        self.probes += 1
        if self.probe_error is not None:
            raise self.probe_error

    def listen(self, stop: threading.Event) -> Iterator[TranscriptFragment]:
        try:
            for fragment in self.fragments:
                yield fragment
            if self.listen_error is not None:
                raise self.listen_error
        finally:
            self.done.set()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, GROQ_API_KEY=None, QUICK_QUESTION_COUNT=5, COMPLETE_QUESTION_COUNT=10)


@pytest.fixture
def route() -> LlmRoute:
    return LlmRoute(
        name="test",
        base_url="http://example.com/v1",
        model="test-model",
        timeout_s=1.0,
        api_key="test-key",
    )


@pytest.fixture
def offline_route() -> LlmRoute:
    return LlmRoute(name="test", base_url="http://example.com/v1", model="test-model", timeout_s=1.0)


@pytest.fixture
def quick_config() -> InterviewConfig:
    return InterviewConfig(
        mode="quick",
        area="Desenvolvedor Frontend",
        experience_level="Pleno (3-5 anos)",
        candidate_name="Ana",
    )
