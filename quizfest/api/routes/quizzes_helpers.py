from __future__ import annotations

import structlog
from fastapi import HTTPException, Request

from quizfest.core.config import get_settings
from quizfest.game.errors import (
    ParticipationNotFoundError,
    QuestionNotFoundError,
    QuizAccessForbiddenError,
    QuizNotFoundError,
    QuizServiceError,
)
from quizfest.game.quizzes.types import (
    ParticipationOutcome,
    PlayableQuiz,
    QuestionSnapshot,
    QuizDetail,
    QuizStatsOutcome,
    QuizSummary,
)
from quizfest.game.scoring.engine import round_for_display
from quizfest.game.scoring.types import ParticipantSummary
from quizfest.services.owner_auth import extract_owner_user_id

from .quizzes_models import (
    AnswerResultResponse,
    MostMissedQuestionResponse,
    OwnerQuestionResponse,
    ParticipantSummaryResponse,
    ParticipationResponse,
    PlayableQuizResponse,
    PlayQuestionResponse,
    QuestionResponse,
    QuizDetailResponse,
    QuizRefResponse,
    QuizStatsResponse,
    QuizSummaryResponse,
)

logger = structlog.get_logger(__name__)

_ERROR_RESPONSES: tuple[tuple[type[QuizServiceError], int, str], ...] = (
    (QuizNotFoundError, 404, "E_QUIZ_NOT_FOUND"),
    (QuestionNotFoundError, 404, "E_QUESTION_NOT_FOUND"),
    (ParticipationNotFoundError, 404, "E_PARTICIPATION_NOT_FOUND"),
    (QuizAccessForbiddenError, 403, "E_FORBIDDEN"),
)


def _require_owner_user_id(request: Request) -> int:
    settings = get_settings()
    user_id = extract_owner_user_id(request, expected_token=settings.internal_api_token)
    if user_id is None:
        logger.warning("owner_auth_failed", path=request.url.path)
        raise HTTPException(status_code=401, detail={"code": "E_UNAUTHORIZED"})
    return user_id


def _as_http_exception(exc: QuizServiceError) -> HTTPException:
    for error_type, status_code, code in _ERROR_RESPONSES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail={"code": code})
    return HTTPException(status_code=400, detail={"code": "E_QUIZ_REQUEST_FAILED"})


def _participation_response(outcome: ParticipationOutcome) -> ParticipationResponse:
    return ParticipationResponse(
        id=outcome.participation_id,
        quiz_id=outcome.quiz_id,
        quiz_title=outcome.quiz_title,
        participant_name=outcome.participant_name,
        score=outcome.score,
        total_questions=outcome.total_questions,
        percentage=outcome.percentage,
        completed_at=outcome.completed_at,
        results=[AnswerResultResponse(**result.to_payload()) for result in outcome.results],
    )


def _participant_summary_response(summary: ParticipantSummary) -> ParticipantSummaryResponse:
    return ParticipantSummaryResponse(
        id=summary.participation_id,
        participant_name=summary.participant_name,
        score=summary.score,
        total_questions=summary.total_questions,
        percentage=round_for_display(summary.percentage),
        completed_at=summary.completed_at,
    )


def _stats_response(outcome: QuizStatsOutcome) -> QuizStatsResponse:
    stats = outcome.stats
    most_missed = None
    if stats.most_missed_question is not None:
        most_missed = MostMissedQuestionResponse(
            id=stats.most_missed_question.question_id,
            question_text=stats.most_missed_question.question_text,
            miss_count=stats.most_missed_question.miss_count,
        )
    return QuizStatsResponse(
        quiz=QuizRefResponse(id=outcome.quiz_id, title=outcome.quiz_title),
        participant_count=stats.participant_count,
        average_score=round_for_display(stats.average_score),
        average_percentage=round_for_display(stats.average_percentage),
        most_missed_question=most_missed,
        participants=[_participant_summary_response(summary) for summary in stats.participants],
    )


def _quiz_summary_response(summary: QuizSummary) -> QuizSummaryResponse:
    return QuizSummaryResponse(
        id=summary.quiz_id,
        title=summary.title,
        question_count=summary.question_count,
        participant_count=summary.participant_count,
        created_at=summary.created_at,
        updated_at=summary.updated_at,
    )


def _quiz_detail_response(detail: QuizDetail) -> QuizDetailResponse:
    return QuizDetailResponse(
        **_quiz_summary_response(detail.summary).model_dump(),
        questions=[
            OwnerQuestionResponse(
                id=question.question_id,
                question_text=question.text,
                options=list(question.options),
                correct_option_index=question.correct_option_index,
                order_index=question.order_index,
            )
            for question in detail.questions
        ],
    )


def _playable_quiz_response(quiz: PlayableQuiz) -> PlayableQuizResponse:
    return PlayableQuizResponse(
        id=quiz.quiz_id,
        title=quiz.title,
        creator_name=quiz.creator_name,
        questions=[
            PlayQuestionResponse(
                id=question.question_id,
                question_text=question.text,
                options=list(question.options),
            )
            for question in quiz.questions
        ],
    )


def _question_response(snapshot: QuestionSnapshot) -> QuestionResponse:
    question = snapshot.question
    return QuestionResponse(
        id=question.question_id,
        quiz_id=snapshot.quiz_id,
        question_text=question.text,
        options=list(question.options),
        correct_option_index=question.correct_option_index,
        order_index=question.order_index,
    )
