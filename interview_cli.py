"""Terminal runner for a mock interview session."""
from __future__ import annotations

import argparse
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from config.settings import settings
from interview_evaluation import EvaluationService, Feedback
from interview_session import InterviewConfig, InterviewSession, InterviewStateError, SessionSummary


def _print_feedback(feedback: Feedback, write: Callable[[str], None]) -> None:
    write(f"Score: {feedback.score}/100")
    write("Strengths:")
    for item in feedback.strengths:
        write(f"  + {item}")
    write("Improvements:")
    for item in feedback.improvements:
        write(f"  - {item}")
    write(feedback.overall)


def _print_summary(summary: SessionSummary, write: Callable[[str], None]) -> None:
    write("Interview finished!")
    write(f"Candidate: {summary.candidate_name}")
    write(f"Area: {summary.area} ({summary.experience_level})")
    write(f"Questions answered: {summary.answered_count}")
    write(f"Average score: {summary.average_score}/100")


def run_session(
    session: InterviewSession,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Optional[SessionSummary]:
    """Drive ``session`` over a line-based console; returns the summary when completed."""

    write(f"Preparing questions for {session.config.area}...")
    session.load_questions()
    if session.offline_notice:
        write(session.offline_notice)
    try:
        while not session.terminal:
            question = session.current_question
            if question is None:
                raise InterviewStateError("No current question")
            position = session.current_index + 1
            write("")
            write(f"Question {position}/{session.target_question_count} [{question.category}]")
            write(question.text)
            result = session.submit_answer(read("> "))
            if not result.accepted:
                write(result.message or "")
                continue
            if result.feedback is not None:
                _print_feedback(result.feedback, write)
            read("Press Enter for the next question...")
            session.next_question()
    except (EOFError, KeyboardInterrupt):
        write("")
        write("Interview interrupted.")
        session.return_to_setup()
        return None
    summary = session.summary()
    _print_summary(summary, write)
    session.return_to_setup()
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Practice a job interview with AI feedback")
    parser.add_argument("--name", required=True, help="Candidate name")
    parser.add_argument("--area", required=True, help="Job area, e.g. 'Desenvolvedor Frontend'")
    parser.add_argument("--experience", required=True, help="Experience level, e.g. 'Pleno (3-5 anos)'")
    parser.add_argument("--mode", choices=("quick", "complete"), default="quick")
    parser.add_argument("--job-description", default=None, help="Optional job description text")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = InterviewConfig(
            mode=args.mode,
            area=args.area,
            experience_level=args.experience,
            candidate_name=args.name,
            job_description=args.job_description,
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"]) or "input"
        parser.error(f"invalid setup ({fields}): values must not be blank")
    session = InterviewSession(config, EvaluationService(), settings=settings)
    run_session(session)


if __name__ == "__main__":
    main()
