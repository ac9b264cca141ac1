from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Request, status

from quizfest.db.session import SessionLocal
from quizfest.game.errors import QuizServiceError
from quizfest.game.quizzes import management

from .quizzes_helpers import _as_http_exception, _question_response, _require_owner_user_id
from .quizzes_models import (
    DeletedResponse,
    QuestionCreateRequest,
    QuestionEnvelope,
    QuestionUpdateRequest,
)

router = APIRouter(prefix="/api", tags=["questions"])


@router.post(
    "/quizzes/{quiz_id}/questions",
    response_model=QuestionEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def add_question(
    quiz_id: UUID,
    payload: QuestionCreateRequest,
    request: Request,
) -> QuestionEnvelope:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            snapshot = await management.add_question(
                session,
                quiz_id=quiz_id,
                owner_user_id=owner_user_id,
                question_text=payload.question_text,
                options=payload.options,
                correct_option_index=payload.correct_option_index,
                now_utc=datetime.now(timezone.utc),
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return QuestionEnvelope(question=_question_response(snapshot))


@router.put("/questions/{question_id}", response_model=QuestionEnvelope)
async def update_question(
    question_id: UUID,
    payload: QuestionUpdateRequest,
    request: Request,
) -> QuestionEnvelope:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            snapshot = await management.update_question(
                session,
                question_id=question_id,
                owner_user_id=owner_user_id,
                question_text=payload.question_text,
                options=payload.options,
                correct_option_index=payload.correct_option_index,
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return QuestionEnvelope(question=_question_response(snapshot))


@router.delete("/questions/{question_id}", response_model=DeletedResponse)
async def delete_question(question_id: UUID, request: Request) -> DeletedResponse:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            await management.delete_question(
                session,
                question_id=question_id,
                owner_user_id=owner_user_id,
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return DeletedResponse(id=question_id)
