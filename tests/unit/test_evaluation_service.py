import json

import httpx
import pytest

from conftest import FakeHttpClient
from interview_evaluation import FALLBACK_FOLLOW_UP, EvaluationService, fallback_questions
from interview_evaluation.fallbacks import FALLBACK_QUESTION_BANK
from interview_evaluation.heuristic import score_answer

ANSWER = "I worked on a project where I implemented a payment API. It used a queue."


def test_generate_questions_returns_parsed_list(route):
    client = FakeHttpClient('```json\n["Introduce yourself", "Explain hooks", "Describe a conflict"]\n```')
    service = EvaluationService(route, client=client)
    assert service.generate_questions("Frontend Developer", "Senior", 3) == [
        "Introduce yourself",
        "Explain hooks",
        "Describe a conflict",
    ]
    assert not service.offline


def test_generate_questions_truncates_to_count(route):
    client = FakeHttpClient(json.dumps(["a", "b", "c", "d"]))
    assert EvaluationService(route, client=client).generate_questions("Design", "Junior", 2) == ["a", "b"]


@pytest.mark.parametrize(
    "reply",
    ["No questions today", "[]", pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"), httpx.ReadTimeout("slow")],
)
def test_generate_questions_falls_back_on_failure(route, reply):
    service = EvaluationService(route, client=FakeHttpClient(reply))
    assert service.generate_questions("Desenvolvedor Backend", "Pleno", 5) == list(
        FALLBACK_QUESTION_BANK["Desenvolvedor Backend"]
    )


def test_fallback_table_has_default_branch():
    generic = fallback_questions("Recursos Humanos")
    assert len(generic) == 5
    assert "Recursos Humanos" in generic[0]
    assert fallback_questions("Frontend Developer") == fallback_questions("Desenvolvedor Frontend")


def test_offline_service_uses_static_frontend_list(offline_route):
    client = FakeHttpClient()
    service = EvaluationService(offline_route, client=client)
    questions = service.generate_questions("Desenvolvedor Frontend", "Pleno", 5)
    assert service.offline
    assert questions == list(FALLBACK_QUESTION_BANK["Desenvolvedor Frontend"])
    assert len(questions) == 5
    assert client.requests == []


def test_offline_evaluation_is_heuristic_and_says_so(offline_route):
    service = EvaluationService(offline_route, client=FakeHttpClient())
    feedback = service.evaluate_answer("Tell me about you", ANSWER, "Desenvolvedor Frontend")
    assert feedback.score == score_answer(ANSWER)
    assert "offline" in feedback.overall.lower()
    assert "not configured" in feedback.overall


def test_evaluation_parses_remote_feedback(route):
    payload = {
        "score": 91,
        "strengths": ["Specific example"],
        "improvements": ["Mention trade-offs"],
        "overall": "Excellent, well structured answer.",
    }
    service = EvaluationService(route, client=FakeHttpClient(json.dumps(payload)))
    feedback = service.evaluate_answer("Q", ANSWER, "Backend Developer")
    assert feedback.score == 91
    assert feedback.overall == payload["overall"]


def test_evaluation_transport_failure_names_failure_class(route):
    service = EvaluationService(route, client=FakeHttpClient(httpx.ConnectError("down")))
    feedback = service.evaluate_answer("Q", ANSWER, "Backend Developer")
    assert feedback.score == score_answer(ANSWER)
    assert "unavailable" in feedback.overall
    assert "down" not in feedback.overall


@pytest.mark.parametrize(
    "answer, strengths",
    [
        ("ok", ["Answer provided", "Attempted to answer the question"]),
        (
            "In my last project I built a framework for the team. " + "detail " * 60,
            ["Well structured answer", "Shows knowledge of the field"],
        ),
    ],
)
def test_fallback_phrasing_follows_thresholds(offline_route, answer, strengths):
    feedback = EvaluationService(offline_route).evaluate_answer("Q", answer, "Design")
    assert feedback.strengths == strengths
    assert len(feedback.improvements) == 2


def test_follow_up_strips_quotes(route):
    service = EvaluationService(route, client=FakeHttpClient('"What metrics did you track?"'))
    assert service.generate_follow_up("Q", "A", "Design") == "What metrics did you track?"


@pytest.mark.parametrize("reply", [httpx.ConnectError("down"), '""'])
def test_follow_up_falls_back_to_generic_question(route, reply):
    service = EvaluationService(route, client=FakeHttpClient(reply))
    assert service.generate_follow_up("Q", "A", "Design") == FALLBACK_FOLLOW_UP


def test_follow_up_offline_uses_generic_question(offline_route):
    assert EvaluationService(offline_route).generate_follow_up("Q", "A", "Design") == FALLBACK_FOLLOW_UP


def test_client_exceptions_count_as_transport_failures(route):
    class ExplodingClient:
        def post(self, *args, **kwargs):
            raise RuntimeError("socket closed")

    service = EvaluationService(route, client=ExplodingClient())
    assert service.generate_follow_up("Q", "A", "Design") == FALLBACK_FOLLOW_UP
