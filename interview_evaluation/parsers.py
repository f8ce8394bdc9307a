"""Tolerant extraction of structured results from free-form model text.

Nothing in this module raises on bad model output: feedback parsing always
yields a complete ``Feedback`` and list parsing degrades to an empty list.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Literal, Optional, Union

from .heuristic import score_answer
from .types import Feedback

logger = logging.getLogger(__name__)

ParseMode = Literal["feedback", "question-list", "single-question"]

DEFAULT_STRENGTHS = ["Answer provided by the candidate"]
DEFAULT_IMPROVEMENTS = ["Keep developing your skills"]
DEFAULT_OVERALL = "Feedback generated by the evaluation service."
UNPARSED_STRENGTHS = ["Answer analysed by the evaluation service"]
UNPARSED_OVERALL = "The evaluation service returned a response that could not be read."
MIN_OVERALL_CHARS = 10
MAX_RAW_OVERALL_CHARS = 200

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_QUOTES = "\"'"


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def _slice_between(text: str, opener: str, closer: str) -> Optional[str]:
    start = text.find(opener)
    end = text.rfind(closer)
    if start < 0 or end <= start:
        return None
    return text[start : end + 1]


def _valid_score(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value != value or not 0 <= value <= 100:  # NaN check
        return None
    return int(round(value))


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    items = [item for item in value if isinstance(item, str)]
    return items or None


def _unparsed_feedback(raw: str, answer_text: str) -> Feedback:
    text = (raw or "").strip()
    if len(text) > MAX_RAW_OVERALL_CHARS:
        text = text[:MAX_RAW_OVERALL_CHARS] + "..."
    return Feedback(
        score=score_answer(answer_text),
        strengths=list(UNPARSED_STRENGTHS),
        improvements=list(DEFAULT_IMPROVEMENTS),
        overall=text or UNPARSED_OVERALL,
    )


def parse_feedback(raw: str, answer_text: str = "") -> Feedback:
    """Read a feedback object out of ``raw``, filling any bad field with a default.

    ``answer_text`` feeds the heuristic when the score is missing or invalid.
    """

    cleaned = strip_code_fences(raw)
    candidate = _slice_between(cleaned, "{", "}")
    if candidate is None:
        logger.warning("Feedback response had no JSON object; using heuristic score")
        return _unparsed_feedback(raw, answer_text)
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        logger.warning("Feedback JSON could not be decoded: %s", type(exc).__name__)
        return _unparsed_feedback(raw, answer_text)
    if not isinstance(data, dict):
        return _unparsed_feedback(raw, answer_text)

    score = _valid_score(data.get("score"))
    if score is None:
        logger.info("Feedback score missing or out of range: %r", data.get("score"))
        score = score_answer(answer_text)
    strengths = _string_list(data.get("strengths")) or list(DEFAULT_STRENGTHS)
    improvements = _string_list(data.get("improvements")) or list(DEFAULT_IMPROVEMENTS)
    overall = data.get("overall")
    if not isinstance(overall, str) or len(overall.strip()) <= MIN_OVERALL_CHARS:
        overall = DEFAULT_OVERALL
    return Feedback(score=score, strengths=strengths, improvements=improvements, overall=overall)


def parse_question_list(raw: str) -> List[str]:
    cleaned = strip_code_fences(raw)
    candidate = _slice_between(cleaned, "[", "]")
    if candidate is None:
        return []
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        logger.warning("Question list could not be decoded: %s", type(exc).__name__)
        return []
    if not isinstance(data, list):
        return []
    return [item.strip() for item in data if isinstance(item, str) and item.strip()]


def parse_single_question(raw: str) -> str:
    text = (raw or "").strip()
    if text[:1] in _QUOTES:
        text = text[1:]
    if text[-1:] in _QUOTES:
        text = text[:-1]
    return text.strip()


def parse_response(
    raw: str,
    mode: ParseMode,
    *,
    answer_text: str = "",
) -> Union[Feedback, List[str], str]:  # Dispatch on parse mode
    if mode == "feedback":
        return parse_feedback(raw, answer_text)
    if mode == "question-list":
        return parse_question_list(raw)
    if mode == "single-question":
        return parse_single_question(raw)
    raise ValueError(f"Unknown parse mode: {mode!r}")


__all__ = [
    "ParseMode",
    "parse_response",
    "parse_feedback",
    "parse_question_list",
    "parse_single_question",
    "strip_code_fences",
]
