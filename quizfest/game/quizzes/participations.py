from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.participations import Participation
from quizfest.db.models.quizzes import Quiz
from quizfest.db.repo.participations_repo import ParticipationsRepo
from quizfest.db.repo.questions_repo import QuestionsRepo
from quizfest.db.repo.quizzes_repo import QuizzesRepo
from quizfest.game.errors import (
    ParticipationNotFoundError,
    QuizAccessForbiddenError,
    QuizNotFoundError,
)
from quizfest.game.quizzes.snapshots import question_views
from quizfest.game.quizzes.types import ParticipationOutcome
from quizfest.game.scoring.engine import (
    display_percentage,
    parse_persisted_answers,
    regrade_answers,
    score_submission,
)
from quizfest.game.scoring.types import SubmittedAnswer

logger = structlog.get_logger(__name__)


async def submit_participation(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    participant_name: str,
    answers: Sequence[SubmittedAnswer],
    now_utc: datetime,
) -> ParticipationOutcome:
    quiz = await QuizzesRepo.get_by_id(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError

    questions = question_views(await QuestionsRepo.list_for_quiz(session, quiz_id=quiz.id))
    scored = score_submission(questions, answers)

    participation = await ParticipationsRepo.create(
        session,
        participation=Participation(
            quiz_id=quiz.id,
            participant_name=participant_name,
            score=scored.score,
            total_questions=scored.total_questions,
            answers=scored.answers_payload(),
            completed_at=now_utc,
        ),
    )
    logger.info(
        "participation_submitted",
        quiz_id=str(quiz.id),
        participation_id=str(participation.id),
        score=scored.score,
        total_questions=scored.total_questions,
        answers_received=len(answers),
        answers_graded=len(scored.results),
    )

    return ParticipationOutcome(
        participation_id=participation.id,
        quiz_id=quiz.id,
        quiz_title=quiz.title,
        participant_name=participation.participant_name,
        score=scored.score,
        total_questions=scored.total_questions,
        percentage=scored.percentage,
        completed_at=participation.completed_at,
        results=list(scored.results),
    )


async def _load_participation_with_quiz(
    session: AsyncSession,
    *,
    participation_id: UUID,
) -> tuple[Participation, Quiz]:
    participation = await ParticipationsRepo.get_by_id(session, participation_id)
    if participation is None:
        raise ParticipationNotFoundError

    quiz = await QuizzesRepo.get_by_id(session, participation.quiz_id)
    if quiz is None:
        raise ParticipationNotFoundError
    return participation, quiz


async def _build_regraded_outcome(
    session: AsyncSession,
    *,
    participation: Participation,
    quiz: Quiz,
) -> ParticipationOutcome:
    questions = question_views(await QuestionsRepo.list_for_quiz(session, quiz_id=quiz.id))
    results = regrade_answers(questions, parse_persisted_answers(participation.answers))

    return ParticipationOutcome(
        participation_id=participation.id,
        quiz_id=quiz.id,
        quiz_title=quiz.title,
        participant_name=participation.participant_name,
        score=participation.score,
        total_questions=participation.total_questions,
        percentage=display_percentage(participation.score, participation.total_questions),
        completed_at=participation.completed_at,
        results=results,
    )


async def get_participation_result(
    session: AsyncSession,
    *,
    participation_id: UUID,
) -> ParticipationOutcome:
    participation, quiz = await _load_participation_with_quiz(
        session,
        participation_id=participation_id,
    )
    return await _build_regraded_outcome(session, participation=participation, quiz=quiz)


async def get_participation_details(
    session: AsyncSession,
    *,
    participation_id: UUID,
    owner_user_id: int,
) -> ParticipationOutcome:
    participation, quiz = await _load_participation_with_quiz(
        session,
        participation_id=participation_id,
    )
    if quiz.user_id != owner_user_id:
        raise QuizAccessForbiddenError
    return await _build_regraded_outcome(session, participation=participation, quiz=quiz)
