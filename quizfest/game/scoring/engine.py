"""Grading of answer sets against a quiz's current question bank.

Answers whose question id is not in the bank are dropped: they add nothing to
the score and produce no result row. ``total_questions`` is always the size of
the bank, so skipped or stale answers lower the percentage.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from quizfest.game.scoring.grader import grade_answer
from quizfest.game.scoring.question_bank import build_question_bank
from quizfest.game.scoring.types import (
    AnswerResult,
    GradedAnswers,
    QuestionView,
    ScoredSubmission,
    SubmittedAnswer,
)

PERCENTAGE_DISPLAY_DIGITS = 2
_DISPLAY_QUANTUM = Decimal(1).scaleb(-PERCENTAGE_DISPLAY_DIGITS)


def compute_percentage(score: int, total_questions: int) -> float:
    if total_questions <= 0:
        return 0.0
    return (score / total_questions) * 100


def round_for_display(value: float) -> float:
    # Exact halves round up; the float's exact binary value decides what a half is.
    return float(Decimal(value).quantize(_DISPLAY_QUANTUM, rounding=ROUND_HALF_UP))


def display_percentage(score: int, total_questions: int) -> float:
    return round_for_display(compute_percentage(score, total_questions))


def grade_answers(
    bank: Mapping[str, QuestionView],
    answers: Iterable[SubmittedAnswer],
) -> GradedAnswers:
    graded = GradedAnswers()
    for answer in answers:
        question = bank.get(answer.question_id)
        if question is None:
            continue

        result = grade_answer(question, answer)
        if result.is_correct:
            graded.score += 1
        graded.results.append(result)
        graded.accepted_answers.append(
            SubmittedAnswer(
                question_id=question.question_id,
                selected_option_index=answer.selected_option_index,
            )
        )
    return graded


def score_submission(
    questions: Sequence[QuestionView],
    answers: Iterable[SubmittedAnswer],
) -> ScoredSubmission:
    bank = build_question_bank(questions)
    graded = grade_answers(bank, answers)
    total_questions = len(questions)
    return ScoredSubmission(
        score=graded.score,
        total_questions=total_questions,
        percentage=display_percentage(graded.score, total_questions),
        results=tuple(graded.results),
        accepted_answers=tuple(graded.accepted_answers),
    )


def regrade_answers(
    questions: Iterable[QuestionView],
    answers: Iterable[SubmittedAnswer],
) -> list[AnswerResult]:
    """Rebuild result rows for a stored answer log against the current questions.

    Stored score and total_questions are not touched; if the quiz was edited
    after submission the rows can disagree with them.
    """
    return grade_answers(build_question_bank(questions), answers).results


def parse_persisted_answers(raw: object) -> list[SubmittedAnswer]:
    if not isinstance(raw, list):
        return []

    answers: list[SubmittedAnswer] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        question_id = item.get("question_id")
        selected_option_index = item.get("selected_option_index")
        if not isinstance(question_id, str):
            continue
        if isinstance(selected_option_index, bool) or not isinstance(selected_option_index, int):
            continue
        answers.append(
            SubmittedAnswer(
                question_id=question_id,
                selected_option_index=selected_option_index,
            )
        )
    return answers
