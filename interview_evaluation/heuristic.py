"""Deterministic fallback scorer used when the remote evaluator is unusable."""
from __future__ import annotations

import re

EMPTY_ANSWER_SCORE = 20
BASE_SCORE = 40
MIN_SCORE = 25
MAX_SCORE = 85

# (word count threshold, bonus), highest first; only the first match applies
LENGTH_BONUSES = ((100, 15), (50, 10), (20, 5))

EXAMPLE_PATTERN = re.compile(
    r"example|experience|project|built|implement|used|worked|developed"
    r"|exemplo|experiência|experiencia|projeto|trabalh|desenvolv|criei|fiz|usei",
    re.IGNORECASE,
)
TECHNICAL_PATTERN = re.compile(
    r"technolog|framework|language|tool|methodolog|process"
    r"|tecnologia|linguagem|ferramenta|metodologia|processo",
    re.IGNORECASE,
)

EXAMPLE_BONUS = 15
TECHNICAL_BONUS = 10
STRUCTURE_BONUS = 10


def word_count(text: str) -> int:
    return len(text.split()) if text else 0


def is_well_structured(text: str) -> bool:
    return "." in text and word_count(text) > 20


def score_answer(text: str) -> int:
    """Score an answer from its text alone.

    Blank answers get ``EMPTY_ANSWER_SCORE``; everything else lands in
    ``[MIN_SCORE, MAX_SCORE]``.
    """

    if not text or not text.strip():
        return EMPTY_ANSWER_SCORE

    words = word_count(text)
    score = BASE_SCORE
    for threshold, bonus in LENGTH_BONUSES:
        if words > threshold:
            score += bonus
            break
    if EXAMPLE_PATTERN.search(text):
        score += EXAMPLE_BONUS
    if TECHNICAL_PATTERN.search(text):
        score += TECHNICAL_BONUS
    if is_well_structured(text):
        score += STRUCTURE_BONUS
    return min(max(score, MIN_SCORE), MAX_SCORE)


__all__ = ["score_answer", "word_count", "EMPTY_ANSWER_SCORE", "MIN_SCORE", "MAX_SCORE"]
