from __future__ import annotations  # Prompt construction for evaluation, question and follow-up calls

from textwrap import dedent
from typing import Dict, List, NamedTuple, Optional

SCORE_BANDS = (
    ("90-100", "exceptional answer: complete, specific examples, demonstrates expertise"),
    ("80-89", "very good answer: well structured, with some examples"),
    ("70-79", "adequate answer: covers the basics but could be more specific"),
    ("60-69", "partial answer: lacks details or examples"),
    ("50-59", "superficial answer: shows limited knowledge"),
    ("40-49", "inadequate answer: many gaps"),
    ("30-39", "weak answer: does not show the required knowledge"),
    ("0-29", "very inadequate or irrelevant answer"),
)


class PromptPair(NamedTuple):  # System plus user instruction for one call
    system: str
    user: str

    def messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def build_evaluation_prompt(question: str, answer: str, area: str) -> PromptPair:  # Score one answer against the rubric
    bands = "\n".join(f"- {band}: {label}" for band, label in SCORE_BANDS)
    system = dedent(
        """
        You are a human-resources and technical recruiting specialist for {area} positions.

        Analyse the interview answer and give a fair, realistic evaluation.

        SCORING RUBRIC:
        {bands}

        Be rigorous but fair. Consider:
        - Clarity and structure of the answer
        - Technical knowledge demonstrated
        - Practical examples provided
        - Relevance to the position
        - Effective communication
        - Depth of the answer

        Vary the score according to the real quality of the answer. Do not always use the same score.

        Return ONLY a valid JSON object, no prose, no explanations, no markdown:
        {{
          "score": <integer from 0 to 100 following the rubric strictly>,
          "strengths": ["specific strength 1", "specific strength 2"],
          "improvements": ["specific improvement 1", "specific improvement 2"],
          "overall": "objective comment about the answer"
        }}
        """
    ).strip().format(area=area, bands=bands)
    user = "\n\n".join(
        [
            f"POSITION: {area}",
            f'QUESTION: "{question}"',
            f'CANDIDATE ANSWER: "{answer}"',
            "Evaluate this answer following the rubric and return only the JSON object.",
        ]
    )
    return PromptPair(system, user)


def build_question_generation_prompt(
    area: str,
    experience_level: str,
    count: int,
    job_description: Optional[str] = None,
) -> PromptPair:  # Request a batch of opening questions
    system = dedent(
        f"""
        You are a technical recruiting specialist.
        Generate exactly {count} relevant and varied interview questions for a {area} position
        at the {experience_level} experience level.

        The questions must be:
        - Specific to the {area} field
        - Appropriate for the {experience_level} level
        - Varied across technical, behavioral and situational categories
        - Opened by a personal introduction question as the first item

        Return only a JSON array of {count} strings, with no explanations.

        Example response format:
        [
          "Question 1 here",
          "Question 2 here"
        ]
        """
    ).strip()
    user = f"Generate {count} interview questions for {area} ({experience_level} level)."
    if job_description and job_description.strip():
        user += f"\n\nJob description for context:\n{job_description.strip()}"
    return PromptPair(system, user)


def build_follow_up_prompt(previous_question: str, candidate_answer: str, area: str) -> PromptPair:  # Ask for one deeper question
    system = dedent(
        f"""
        You are an experienced interviewer for a {area} position.

        Based on the previous question and the candidate's answer, write one smart follow-up question that:
        - Deepens interesting aspects of the answer
        - Asks for specific examples when needed
        - Explores relevant technical or behavioral competencies
        - Sounds natural and conversational

        Return only the follow-up question as plain text: no list, no JSON, no explanations.
        """
    ).strip()
    user = "\n\n".join(
        [
            f'Previous question: "{previous_question}"',
            f'Candidate answer: "{candidate_answer}"',
            "Write one relevant follow-up question.",
        ]
    )
    return PromptPair(system, user)


__all__ = [
    "PromptPair",
    "SCORE_BANDS",
    "build_evaluation_prompt",
    "build_question_generation_prompt",
    "build_follow_up_prompt",
]
