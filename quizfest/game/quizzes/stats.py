from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.quizzes import Quiz
from quizfest.db.repo.participations_repo import ParticipationsRepo
from quizfest.db.repo.questions_repo import QuestionsRepo
from quizfest.db.repo.quizzes_repo import QuizzesRepo
from quizfest.game.errors import QuizNotFoundError
from quizfest.game.quizzes.snapshots import participation_record, question_views
from quizfest.game.quizzes.types import QuizParticipantsOutcome, QuizStatsOutcome
from quizfest.game.scoring.statistics import aggregate_quiz_stats, summarize_participation

SNAPSHOT_ISOLATION_LEVEL = "REPEATABLE READ"


async def _get_owned_quiz(session: AsyncSession, *, quiz_id: UUID, owner_user_id: int) -> Quiz:
    # Someone else's quiz is reported as missing, not forbidden.
    quiz = await QuizzesRepo.get_for_owner(session, quiz_id=quiz_id, user_id=owner_user_id)
    if quiz is None:
        raise QuizNotFoundError
    return quiz


async def get_quiz_stats(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    owner_user_id: int,
) -> QuizStatsOutcome:
    # Questions and participations must come from one snapshot, otherwise
    # miss counts can mix two versions of the question set.
    await session.connection(execution_options={"isolation_level": SNAPSHOT_ISOLATION_LEVEL})

    quiz = await _get_owned_quiz(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    questions = question_views(await QuestionsRepo.list_for_quiz(session, quiz_id=quiz.id))
    participations = await ParticipationsRepo.list_for_quiz(session, quiz_id=quiz.id)

    stats = aggregate_quiz_stats(
        questions,
        [participation_record(participation) for participation in participations],
    )
    return QuizStatsOutcome(quiz_id=quiz.id, quiz_title=quiz.title, stats=stats)


async def list_quiz_participants(
    session: AsyncSession,
    *,
    quiz_id: UUID,
    owner_user_id: int,
) -> QuizParticipantsOutcome:
    quiz = await _get_owned_quiz(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    participations = await ParticipationsRepo.list_for_quiz(session, quiz_id=quiz.id)
    return QuizParticipantsOutcome(
        quiz_id=quiz.id,
        participants=[
            summarize_participation(participation_record(participation))
            for participation in participations
        ],
    )
