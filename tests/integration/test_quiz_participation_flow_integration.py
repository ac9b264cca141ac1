from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from quizfest.db.models.participations import Participation
from quizfest.db.models.questions import Question
from quizfest.db.session import SessionLocal
from quizfest.game.quizzes import management
from quizfest.game.quizzes.participations import get_participation_result, submit_participation
from quizfest.game.quizzes.stats import get_quiz_stats
from quizfest.game.scoring.types import SubmittedAnswer
from tests.integration.quiz_flow_fixtures import NOW_UTC, create_owner, create_quiz_with_questions


@pytest.mark.asyncio
async def test_participations_aggregate_into_owner_stats() -> None:
    owner_user_id = await create_owner()
    summary, question_ids = await create_quiz_with_questions(
        owner_user_id=owner_user_id,
        correct_indexes=[0, 1],
    )
    first, second = question_ids

    async with SessionLocal.begin() as session:
        perfect = await submit_participation(
            session,
            quiz_id=summary.quiz_id,
            participant_name="Ada",
            answers=[SubmittedAnswer(first, 0), SubmittedAnswer(second, 1)],
            now_utc=NOW_UTC,
        )
    async with SessionLocal.begin() as session:
        missed = await submit_participation(
            session,
            quiz_id=summary.quiz_id,
            participant_name="Bob",
            answers=[SubmittedAnswer(first, 3), SubmittedAnswer("not-a-question", 0)],
            now_utc=NOW_UTC + timedelta(minutes=1),
        )

    assert perfect.score == 2
    assert perfect.percentage == 100.0
    assert missed.score == 0
    assert missed.total_questions == 2
    assert len(missed.results) == 1

    async with SessionLocal.begin() as session:
        outcome = await get_quiz_stats(
            session,
            quiz_id=summary.quiz_id,
            owner_user_id=owner_user_id,
        )

    stats = outcome.stats
    assert stats.participant_count == 2
    assert stats.average_score == 1.0
    assert stats.average_percentage == 50.0
    assert stats.most_missed_question is not None
    assert stats.most_missed_question.question_id == first
    assert stats.most_missed_question.miss_count == 1
    assert [row.participant_name for row in stats.participants] == ["Ada", "Bob"]


@pytest.mark.asyncio
async def test_deleting_quiz_removes_questions_and_participations() -> None:
    owner_user_id = await create_owner()
    summary, question_ids = await create_quiz_with_questions(
        owner_user_id=owner_user_id,
        correct_indexes=[2],
    )

    async with SessionLocal.begin() as session:
        outcome = await submit_participation(
            session,
            quiz_id=summary.quiz_id,
            participant_name="Ada",
            answers=[SubmittedAnswer(question_ids[0], 2)],
            now_utc=NOW_UTC,
        )
    async with SessionLocal.begin() as session:
        result = await get_participation_result(session, participation_id=outcome.participation_id)
    assert result.results[0].is_correct is True

    async with SessionLocal.begin() as session:
        await management.delete_quiz(session, quiz_id=summary.quiz_id, owner_user_id=owner_user_id)

    async with SessionLocal.begin() as session:
        remaining_questions = await session.scalar(select(func.count()).select_from(Question))
        remaining_participations = await session.scalar(
            select(func.count()).select_from(Participation)
        )
    assert remaining_questions == 0
    assert remaining_participations == 0
