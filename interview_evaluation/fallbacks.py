"""Locally computed substitutes for when the remote model is unusable."""
from __future__ import annotations

from typing import List, Literal, Mapping, Sequence, Tuple

from .heuristic import score_answer
from .types import Feedback

FailureKind = Literal["not_configured", "unavailable", "unparseable"]

FALLBACK_FOLLOW_UP = "Can you give a specific example of a situation where you applied that experience?"

_FRONTEND_QUESTIONS: Tuple[str, ...] = (
    "Tell me about your experience with frontend development and the technologies you master.",
    "How do you approach responsiveness and accessibility in your projects?",
    "Describe a complex technical challenge you faced recently and how you solved it.",
    "How do you keep your frontend knowledge up to date?",
    "Tell me about your experience with version control tools and working in a team.",
)

_BACKEND_QUESTIONS: Tuple[str, ...] = (
    "Describe your experience with backend development and the technologies you use.",
    "How do you design and implement efficient REST APIs?",
    "Tell me about your experience with databases and query optimisation.",
    "How do you handle security and authentication in backend applications?",
    "Describe a project where you implemented a scalable solution.",
)

FALLBACK_QUESTION_BANK: Mapping[str, Sequence[str]] = {
    "Desenvolvedor Frontend": _FRONTEND_QUESTIONS,
    "Frontend Developer": _FRONTEND_QUESTIONS,
    "Desenvolvedor Backend": _BACKEND_QUESTIONS,
    "Backend Developer": _BACKEND_QUESTIONS,
}

_GENERIC_QUESTIONS: Tuple[str, ...] = (
    "Tell me about your professional experience in the {area} field.",
    "What are your main technical skills?",
    "Describe a challenge you faced and how you solved it.",
    "How do you keep up to date in your field?",
    "Where do you see yourself professionally in the next few years?",
)

# Used by the session when question generation hands back nothing at all
DEFAULT_SESSION_QUESTIONS: Tuple[Tuple[str, str], ...] = (
    (
        "Hello {candidate_name}! Tell me a little about yourself and your professional experience in {area}.",
        "Personal Introduction",
    ),
    (
        "What are your main technical skills and how have you applied them in previous projects?",
        "Technical Skills",
    ),
    ("Describe a challenging situation you faced at work and how you resolved it.", "Problem Solving"),
    ("Why are you interested in this position and in our company?", "Motivation"),
    ("Where do you see yourself professionally in five years?", "Career Goals"),
)

OFFLINE_OVERALL = {
    "not_configured": "Offline mode: the evaluation service is not configured (no API key), so this is a heuristic estimate.",
    "unavailable": "Evaluation service unavailable: this is a heuristic estimate of your answer.",
}


def fallback_questions(area: str) -> List[str]:
    """Return the static question list for ``area``.

    Known areas have bespoke lists; every other area gets the generic list
    with the area name filled in.
    """

    key = (area or "").strip()
    bespoke = FALLBACK_QUESTION_BANK.get(key)
    if bespoke is not None:
        return list(bespoke)
    return [template.format(area=key) for template in _GENERIC_QUESTIONS]


def default_session_questions(candidate_name: str, area: str) -> List[Tuple[str, str]]:
    return [
        (text.format(candidate_name=candidate_name, area=area), category)
        for text, category in DEFAULT_SESSION_QUESTIONS
    ]


def offline_feedback(answer_text: str, kind: FailureKind = "unavailable") -> Feedback:
    """Heuristic feedback whose wording depends on the fallback score."""

    score = score_answer(answer_text)
    strengths = [
        "Well structured answer" if score > 70 else "Answer provided",
        "Shows knowledge of the field" if score > 60 else "Attempted to answer the question",
    ]
    improvements = [
        "Could be more specific in some points" if score >= 70 else "Add more specific details",
        "Expand with additional examples" if score >= 60 else "Include practical examples from your experience",
    ]
    overall = OFFLINE_OVERALL.get(kind, OFFLINE_OVERALL["unavailable"])
    return Feedback(score=score, strengths=strengths, improvements=improvements, overall=overall)


__all__ = [
    "FALLBACK_FOLLOW_UP",
    "FALLBACK_QUESTION_BANK",
    "DEFAULT_SESSION_QUESTIONS",
    "FailureKind",
    "fallback_questions",
    "default_session_questions",
    "offline_feedback",
]
