from .fallbacks import (
    FALLBACK_FOLLOW_UP,
    FALLBACK_QUESTION_BANK,
    default_session_questions,
    fallback_questions,
    offline_feedback,
)
from .heuristic import score_answer
from .parsers import ParseMode, parse_feedback, parse_question_list, parse_response, parse_single_question
from .prompts import (
    PromptPair,
    build_evaluation_prompt,
    build_follow_up_prompt,
    build_question_generation_prompt,
)
from .service import OFFLINE_NOTICE, EvaluationService
from .types import Feedback

__all__ = [
    "EvaluationService",
    "FALLBACK_FOLLOW_UP",
    "FALLBACK_QUESTION_BANK",
    "Feedback",
    "OFFLINE_NOTICE",
    "ParseMode",
    "PromptPair",
    "build_evaluation_prompt",
    "build_follow_up_prompt",
    "build_question_generation_prompt",
    "default_session_questions",
    "fallback_questions",
    "offline_feedback",
    "parse_feedback",
    "parse_question_list",
    "parse_response",
    "parse_single_question",
    "score_answer",
]
