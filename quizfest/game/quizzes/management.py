from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.questions import Question
from quizfest.db.models.quizzes import Quiz
from quizfest.db.repo.participations_repo import ParticipationsRepo
from quizfest.db.repo.questions_repo import QuestionsRepo
from quizfest.db.repo.quizzes_repo import QuizzesRepo
from quizfest.db.repo.users_repo import UsersRepo
from quizfest.game.errors import (
    QuestionNotFoundError,
    QuizAccessForbiddenError,
    QuizNotFoundError,
)
from quizfest.game.quizzes.snapshots import question_view, question_views
from quizfest.game.quizzes.types import PlayableQuiz, QuestionSnapshot, QuizDetail, QuizSummary

UNKNOWN_CREATOR_NAME = "Unknown"

logger = structlog.get_logger(__name__)


def _summary(quiz: Quiz, *, question_count: int, participant_count: int) -> QuizSummary:
    return QuizSummary(
        quiz_id=quiz.id,
        title=quiz.title,
        question_count=question_count,
        participant_count=participant_count,
        created_at=quiz.created_at,
        updated_at=quiz.updated_at,
    )


async def _get_quiz_for_owner_write(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    owner_user_id: int,
) -> Quiz:
    quiz = await QuizzesRepo.get_by_id(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError
    if quiz.user_id != owner_user_id:
        raise QuizAccessForbiddenError
    return quiz


async def _get_question_for_owner_write(
    session: AsyncSession,
    *,
    question_id: UUID,
    owner_user_id: int,
) -> Question:
    question = await QuestionsRepo.get_by_id(session, question_id)
    if question is None:
        raise QuestionNotFoundError
    quiz = await QuizzesRepo.get_by_id(session, question.quiz_id)
    if quiz is None:
        raise QuestionNotFoundError
    if quiz.user_id != owner_user_id:
        raise QuizAccessForbiddenError
    return question


async def list_owner_quizzes(session: AsyncSession, *, owner_user_id: int) -> list[QuizSummary]:
    rows = await QuizzesRepo.list_for_owner(session, user_id=owner_user_id)
    return [
        QuizSummary(
            quiz_id=row.id,
            title=row.title,
            question_count=row.question_count,
            participant_count=row.participant_count,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
        for row in rows
    ]


async def get_owner_quiz(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    owner_user_id: int,
) -> QuizDetail:
    quiz = await QuizzesRepo.get_for_owner(session, quiz_id=quiz_id, user_id=owner_user_id)
    if quiz is None:
        raise QuizNotFoundError

    questions = question_views(await QuestionsRepo.list_for_quiz(session, quiz_id=quiz.id))
    participations = await ParticipationsRepo.list_for_quiz(session, quiz_id=quiz.id)
    return QuizDetail(
        summary=_summary(
            quiz,
            question_count=len(questions),
            participant_count=len(participations),
        ),
        questions=questions,
    )


async def create_quiz(
    session: AsyncSession,
    *,
    owner_user_id: int,
    title: str,
    now_utc: datetime,
) -> QuizSummary:
    quiz = await QuizzesRepo.create(
        session,
        quiz=Quiz(
            user_id=owner_user_id,
            title=title,
            created_at=now_utc,
            updated_at=now_utc,
        ),
    )
    logger.info("quiz_created", quiz_id=str(quiz.id), user_id=owner_user_id)
    return _summary(quiz, question_count=0, participant_count=0)


async def update_quiz(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    owner_user_id: int,
    title: str | None,
    now_utc: datetime,
) -> QuizSummary:
    quiz = await _get_quiz_for_owner_write(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    if title:
        quiz.title = title
        quiz.updated_at = now_utc
        await session.flush()

    questions = await QuestionsRepo.list_for_quiz(session, quiz_id=quiz.id)
    participations = await ParticipationsRepo.list_for_quiz(session, quiz_id=quiz.id)
    return _summary(
        quiz,
        question_count=len(questions),
        participant_count=len(participations),
    )


async def delete_quiz(session: AsyncSession, *, quiz_id: UUID, owner_user_id: int) -> None:
    quiz = await _get_quiz_for_owner_write(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    await QuizzesRepo.delete_by_id(session, quiz_id=quiz.id)
    logger.info("quiz_deleted", quiz_id=str(quiz.id), user_id=owner_user_id)


async def get_playable_quiz(session: AsyncSession, *, quiz_id: UUID) -> PlayableQuiz:
    quiz = await QuizzesRepo.get_by_id(session, quiz_id)
    if quiz is None:
        raise QuizNotFoundError

    creator = await UsersRepo.get_by_id(session, quiz.user_id)
    creator_name = creator.full_name if creator is not None and creator.full_name else None
    return PlayableQuiz(
        quiz_id=quiz.id,
        title=quiz.title,
        creator_name=creator_name or UNKNOWN_CREATOR_NAME,
        questions=question_views(await QuestionsRepo.list_for_quiz(session, quiz_id=quiz.id)),
    )


async def add_question(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    owner_user_id: int,
    question_text: str,
    options: Sequence[str],
    correct_option_index: int,
    now_utc: datetime,
) -> QuestionSnapshot:
    quiz = await _get_quiz_for_owner_write(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    order_index = await QuestionsRepo.get_next_order_index(session, quiz_id=quiz.id)

    question = await QuestionsRepo.create(
        session,
        question=Question(
            quiz_id=quiz.id,
            question_text=question_text,
            options=list(options),
            correct_option_index=correct_option_index,
            order_index=order_index,
            created_at=now_utc,
        ),
    )
    logger.info(
        "question_added",
        quiz_id=str(quiz.id),
        question_id=str(question.id),
        order_index=order_index,
    )
    return QuestionSnapshot(quiz_id=quiz.id, question=question_view(question))


async def update_question(
    session: AsyncSession,
    *,
    question_id: UUID,
    owner_user_id: int,
    question_text: str | None = None,
    options: Sequence[str] | None = None,
    correct_option_index: int | None = None,
) -> QuestionSnapshot:
    """Apply a partial edit.

    Stored participations keep their score; only regraded views change.
    """
    question = await _get_question_for_owner_write(
        session,
        question_id=question_id,
        owner_user_id=owner_user_id,
    )
    if question_text:
        question.question_text = question_text
    if options is not None:
        question.options = list(options)
    if correct_option_index is not None:
        question.correct_option_index = correct_option_index
    await session.flush()

    logger.info("question_updated", quiz_id=str(question.quiz_id), question_id=str(question.id))
    return QuestionSnapshot(quiz_id=question.quiz_id, question=question_view(question))


async def delete_question(session: AsyncSession, *, question_id: UUID, owner_user_id: int) -> None:
    question = await _get_question_for_owner_write(
        session,
        question_id=question_id,
        owner_user_id=owner_user_id,
    )
    await QuestionsRepo.delete_by_id(session, question_id=question.id)
    logger.info("question_deleted", quiz_id=str(question.quiz_id), question_id=str(question.id))
