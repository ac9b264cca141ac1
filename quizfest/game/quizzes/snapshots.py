from __future__ import annotations

from collections.abc import Iterable

from quizfest.db.models.participations import Participation
from quizfest.db.models.questions import Question
from quizfest.game.scoring.engine import parse_persisted_answers
from quizfest.game.scoring.types import ParticipationRecord, QuestionView


def question_view(question: Question) -> QuestionView:
    return QuestionView(
        question_id=str(question.id),
        text=question.question_text,
        options=tuple(question.options or ()),
        correct_option_index=question.correct_option_index,
        order_index=question.order_index,
    )


def question_views(questions: Iterable[Question]) -> list[QuestionView]:
    return [question_view(question) for question in questions]


def participation_record(participation: Participation) -> ParticipationRecord:
    return ParticipationRecord(
        participation_id=str(participation.id),
        participant_name=participation.participant_name,
        score=participation.score,
        total_questions=participation.total_questions,
        answers=tuple(parse_persisted_answers(participation.answers)),
        completed_at=participation.completed_at,
    )
