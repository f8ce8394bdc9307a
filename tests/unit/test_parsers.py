import json

import pytest

from interview_evaluation.heuristic import score_answer
from interview_evaluation.parsers import (
    DEFAULT_IMPROVEMENTS,
    DEFAULT_OVERALL,
    DEFAULT_STRENGTHS,
    parse_feedback,
    parse_question_list,
    parse_response,
    parse_single_question,
    strip_code_fences,
)
from interview_evaluation.types import Feedback

ANSWER = "I built a dashboard with React and implemented a CI process for the team."

VALID = {
    "score": 82,
    "strengths": ["Concrete example", "Mentions tooling"],
    "improvements": ["Quantify the impact"],
    "overall": "A well grounded answer with a clear example.",
}


@pytest.mark.parametrize(
    "raw",
    [
        json.dumps(VALID),
        "```json\n" + json.dumps(VALID) + "\n```",
        "Here is my evaluation:\n```\n" + json.dumps(VALID, indent=2) + "\n```\nHope it helps!",
    ],
)
def test_valid_feedback_round_trips(raw):
    feedback = parse_feedback(raw, ANSWER)
    assert feedback == Feedback(**VALID)


def test_strip_code_fences_removes_markers():
    assert strip_code_fences("```json\n[1]\n```") == "[1]"


@pytest.mark.parametrize("score", [-1, 101, "85", None, True, 1e9])
def test_invalid_score_uses_heuristic(score):
    payload = dict(VALID, score=score)
    feedback = parse_feedback(json.dumps(payload), ANSWER)
    assert feedback.score == score_answer(ANSWER)
    assert feedback.strengths == VALID["strengths"]


def test_bad_lists_and_short_overall_get_defaults():
    payload = {"score": 60, "strengths": [], "improvements": "not a list", "overall": "ok"}
    feedback = parse_feedback(json.dumps(payload), ANSWER)
    assert feedback.score == 60
    assert feedback.strengths == DEFAULT_STRENGTHS
    assert feedback.improvements == DEFAULT_IMPROVEMENTS
    assert feedback.overall == DEFAULT_OVERALL


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "I think the answer was decent.",
        "{not json at all}",
        "} backwards {",
        "[1, 2, 3]",
        "x" * 500,
    ],
)
def test_malformed_feedback_still_yields_valid_feedback(raw):
    feedback = parse_feedback(raw, ANSWER)
    assert 0 <= feedback.score <= 100
    assert feedback.strengths and feedback.improvements and feedback.overall
    assert len(feedback.overall) <= 203


def test_unparsed_feedback_keeps_model_text_as_overall():
    feedback = parse_feedback("The candidate did fine.", ANSWER)
    assert feedback.overall == "The candidate did fine."
    assert feedback.score == score_answer(ANSWER)


def test_question_list_parsing():
    raw = 'Sure!\n```json\n["Tell me about you", "  ", 3, "Why us?"]\n```'
    assert parse_question_list(raw) == ["Tell me about you", "Why us?"]


@pytest.mark.parametrize("raw", ["", "no list here", "[unclosed", '{"questions": "a"}', "[]"])
def test_question_list_signals_no_questions(raw):
    assert parse_question_list(raw) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('"How did you measure success?"', "How did you measure success?"),
        ("  'Why that stack?'  ", "Why that stack?"),
        ("What happened next?", "What happened next?"),
        ("", ""),
    ],
)
def test_single_question_strips_one_quote_pair(raw, expected):
    assert parse_single_question(raw) == expected


def test_parse_response_dispatches_on_mode():
    assert isinstance(parse_response(json.dumps(VALID), "feedback"), Feedback)
    assert parse_response('["a"]', "question-list") == ["a"]
    assert parse_response('"b"', "single-question") == "b"
    with pytest.raises(ValueError):
        parse_response("", "other")  # type: ignore[arg-type]


NESTED = "[" * 100000 + "]" * 100000


def test_deeply_nested_feedback_degrades_to_heuristic():
    raw = '{"score": 80, "x": ' + NESTED + "}"
    feedback = parse_feedback(raw, ANSWER)
    assert feedback.score == score_answer(ANSWER)
    assert feedback.strengths and feedback.improvements and feedback.overall


def test_deeply_nested_question_list_yields_no_questions():
    assert parse_question_list(NESTED) == []


def test_feedback_lists_keep_every_string_item():
    payload = dict(VALID, strengths=["Clear", " ", ""], improvements=[" Depth "])
    feedback = parse_feedback(json.dumps(payload), ANSWER)
    assert feedback.strengths == ["Clear", " ", ""]
    assert feedback.improvements == [" Depth "]
