from __future__ import annotations  # Evaluation service wrapping prompt, remote call and parsing

import logging
from typing import List, Optional

from config import LlmRoute, route_from_settings
from llm_gateway import HttpClient, LlmGatewayError, LlmNotConfiguredError, complete

from .fallbacks import FALLBACK_FOLLOW_UP, fallback_questions, offline_feedback
from .parsers import parse_feedback, parse_question_list, parse_single_question
from .prompts import (
    PromptPair,
    build_evaluation_prompt,
    build_follow_up_prompt,
    build_question_generation_prompt,
)
from .types import Feedback

logger = logging.getLogger(__name__)

OFFLINE_NOTICE = "Offline mode: no API key configured, answers are scored locally."


class EvaluationService:  # One round-trip per operation, degrading to local fallbacks
    def __init__(self, route: Optional[LlmRoute] = None, *, client: Optional[HttpClient] = None) -> None:
        self.route = route or route_from_settings()
        self.client = client
        if not self.route.configured:
            logger.warning("API key not configured for route %s; running in offline mode", self.route.name)

    @property
    def offline(self) -> bool:
        return not self.route.configured

    @property
    def notice(self) -> Optional[str]:
        return OFFLINE_NOTICE if self.offline else None

    def _call(self, prompt: PromptPair) -> str:
        return complete(prompt.messages(), cfg=self.route, client=self.client)

    def generate_questions(
        self,
        area: str,
        experience_level: str,
        count: int,
        job_description: Optional[str] = None,
    ) -> List[str]:
        """Return up to ``count`` opening questions; never raises."""

        if count <= 0:
            return []
        prompt = build_question_generation_prompt(area, experience_level, count, job_description)
        try:
            raw = self._call(prompt)
        except LlmNotConfiguredError:
            logger.info("Question generation offline; using fallback list for area=%s", area)
            return fallback_questions(area)[:count]
        except Exception as exc:  # noqa: BLE001
            logger.error("Question generation remote call failed: %s", exc)
            return fallback_questions(area)[:count]
        try:
            questions = parse_question_list(raw)
        except Exception as exc:  # noqa: BLE001
            logger.error("Question list response unparseable: %s", type(exc).__name__)
            questions = []
        if not questions:
            logger.warning("Question generation response unparseable; using fallback list for area=%s", area)
            return fallback_questions(area)[:count]
        return questions[:count]

    def evaluate_answer(self, question: str, answer_text: str, area: str) -> Feedback:
        """Score one answer; never raises."""

        prompt = build_evaluation_prompt(question, answer_text, area)
        try:
            raw = self._call(prompt)
        except LlmNotConfiguredError:
            logger.info("Evaluation offline; using heuristic feedback")
            return offline_feedback(answer_text, "not_configured")
        except Exception as exc:  # noqa: BLE001
            logger.error("Evaluation remote call failed: %s", exc)
            return offline_feedback(answer_text, "unavailable")
        try:
            return parse_feedback(raw, answer_text)
        except Exception as exc:  # noqa: BLE001
            logger.error("Evaluation response unparseable: %s", exc)
            return offline_feedback(answer_text, "unavailable")

    def generate_follow_up(self, previous_question: str, candidate_answer: str, area: str) -> str:
        """Return one follow-up question.

        Gateway failures fall back to a fixed question; anything else
        propagates to the caller.
        """

        prompt = build_follow_up_prompt(previous_question, candidate_answer, area)
        try:
            raw = self._call(prompt)
        except LlmGatewayError as exc:
            logger.warning("Follow-up remote call failed (%s); using generic follow-up", type(exc).__name__)
            return FALLBACK_FOLLOW_UP
        question = parse_single_question(raw)
        if not question:
            logger.warning("Follow-up response empty; using generic follow-up")
            return FALLBACK_FOLLOW_UP
        return question


__all__ = ["EvaluationService", "OFFLINE_NOTICE"]
