from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Request, status

from quizfest.db.session import SessionLocal
from quizfest.game.errors import QuizServiceError
from quizfest.game.quizzes import management
from quizfest.game.quizzes.stats import get_quiz_stats, list_quiz_participants

from .quizzes_helpers import (
    _as_http_exception,
    _participant_summary_response,
    _playable_quiz_response,
    _quiz_detail_response,
    _quiz_summary_response,
    _require_owner_user_id,
    _stats_response,
)
from .quizzes_models import (
    DeletedResponse,
    ParticipantsEnvelope,
    PlayableQuizEnvelope,
    QuizCreateRequest,
    QuizDetailEnvelope,
    QuizListEnvelope,
    QuizStatsResponse,
    QuizSummaryEnvelope,
    QuizUpdateRequest,
)

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


@router.get("", response_model=QuizListEnvelope)
async def list_quizzes(request: Request) -> QuizListEnvelope:
    owner_user_id = _require_owner_user_id(request)
    async with SessionLocal.begin() as session:
        summaries = await management.list_owner_quizzes(session, owner_user_id=owner_user_id)
    return QuizListEnvelope(quizzes=[_quiz_summary_response(summary) for summary in summaries])


@router.post("", response_model=QuizSummaryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_quiz(payload: QuizCreateRequest, request: Request) -> QuizSummaryEnvelope:
    owner_user_id = _require_owner_user_id(request)
    async with SessionLocal.begin() as session:
        summary = await management.create_quiz(
            session,
            owner_user_id=owner_user_id,
            title=payload.title,
            now_utc=datetime.now(timezone.utc),
        )
    return QuizSummaryEnvelope(quiz=_quiz_summary_response(summary))


@router.get("/{quiz_id}", response_model=QuizDetailEnvelope)
async def show_quiz(quiz_id: UUID, request: Request) -> QuizDetailEnvelope:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            detail = await management.get_owner_quiz(
                session,
                quiz_id=quiz_id,
                owner_user_id=owner_user_id,
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return QuizDetailEnvelope(quiz=_quiz_detail_response(detail))


@router.put("/{quiz_id}", response_model=QuizSummaryEnvelope)
async def update_quiz(
    quiz_id: UUID,
    payload: QuizUpdateRequest,
    request: Request,
) -> QuizSummaryEnvelope:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            summary = await management.update_quiz(
                session,
                quiz_id=quiz_id,
                owner_user_id=owner_user_id,
                title=payload.title,
                now_utc=datetime.now(timezone.utc),
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return QuizSummaryEnvelope(quiz=_quiz_summary_response(summary))


@router.delete("/{quiz_id}", response_model=DeletedResponse)
async def delete_quiz(quiz_id: UUID, request: Request) -> DeletedResponse:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            await management.delete_quiz(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return DeletedResponse(id=quiz_id)


@router.get("/{quiz_id}/stats", response_model=QuizStatsResponse)
async def show_quiz_stats(quiz_id: UUID, request: Request) -> QuizStatsResponse:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            outcome = await get_quiz_stats(session, quiz_id=quiz_id, owner_user_id=owner_user_id)
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return _stats_response(outcome)


@router.get("/{quiz_id}/participants", response_model=ParticipantsEnvelope)
async def show_quiz_participants(quiz_id: UUID, request: Request) -> ParticipantsEnvelope:
    owner_user_id = _require_owner_user_id(request)
    try:
        async with SessionLocal.begin() as session:
            outcome = await list_quiz_participants(
                session,
                quiz_id=quiz_id,
                owner_user_id=owner_user_id,
            )
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return ParticipantsEnvelope(
        participants=[
            _participant_summary_response(summary) for summary in outcome.participants
        ]
    )


@router.get("/{quiz_id}/play", response_model=PlayableQuizEnvelope)
async def play_quiz(quiz_id: UUID) -> PlayableQuizEnvelope:
    try:
        async with SessionLocal.begin() as session:
            quiz = await management.get_playable_quiz(session, quiz_id=quiz_id)
    except QuizServiceError as exc:
        raise _as_http_exception(exc) from exc
    return PlayableQuizEnvelope(quiz=_playable_quiz_response(quiz))
