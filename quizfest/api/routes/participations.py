from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Request, status

from quizfest.db.session import SessionLocal
from quizfest.game.errors import QuizServiceError
from quizfest.game.quizzes.participations import (
    get_participation_details,
    get_participation_result,
    submit_participation,
)
from quizfest.game.scoring.types import SubmittedAnswer

from .quizzes_helpers import _as_http_exception, _participation_response, _require_owner_user_id
from .quizzes_models import ParticipateRequest, ParticipationEnvelope

router = APIRouter(prefix="/api", tags=["participations"])


@router.post(
    "/quizzes/{quiz_id}/participate",
    response_model=ParticipationEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def participate(quiz_id: UUID, payload: ParticipateRequest) -> ParticipationEnvelope:
    now_utc = datetime.now(timezone.utc)
    answers = [
        SubmittedAnswer(
            question_id=answer.question_id,
            selected_option_index=answer.selected_option_index,
        )
        for answer in payload.answers
    ]
    try:
        async with SessionLocal.begin() as session:
            outcome = await submit_participation(
                session,
                quiz_id=quiz_id,
                participant_name=payload.participant_name,
                answers=answers,
                now_utc=now_utc,
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc

    return ParticipationEnvelope(participation=_participation_response(outcome))


@router.get("/participations/{participation_id}", response_model=ParticipationEnvelope)
async def show_participation(participation_id: UUID) -> ParticipationEnvelope:
    try:
        async with SessionLocal.begin() as session:
            outcome = await get_participation_result(session, participation_id=participation_id)
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc

    return ParticipationEnvelope(participation=_participation_response(outcome))


@router.get("/participations/{participation_id}/details", response_model=ParticipationEnvelope)
async def show_participation_details(
    participation_id: UUID,
    request: Request,
) -> ParticipationEnvelope:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            outcome = await get_participation_details(
                session,
                participation_id=participation_id,
                owner_user_id=owner_user_id,
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc

    return ParticipationEnvelope(participation=_participation_response(outcome))
