from __future__ import annotations

from collections.abc import Iterable

from quizfest.game.scoring.types import QuestionView


def build_question_bank(questions: Iterable[QuestionView]) -> dict[str, QuestionView]:
    """Index the quiz's current questions by id for grading lookups."""
    return {question.question_id: question for question in questions}
