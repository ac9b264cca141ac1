from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field

OptionText = Annotated[str, Field(min_length=1, max_length=200)]


class SubmittedAnswerRequest(BaseModel):
    question_id: str
    # Not range-checked: an unknown index is graded as incorrect.
    selected_option_index: int


class ParticipateRequest(BaseModel):
    participant_name: str = Field(min_length=2, max_length=100)
    answers: list[SubmittedAnswerRequest] = Field(min_length=1)


class QuizCreateRequest(BaseModel):
    title: str = Field(min_length=3, max_length=255)


class QuizUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=255)


class QuestionCreateRequest(BaseModel):
    question_text: str = Field(min_length=5, max_length=500)
    options: list[OptionText] = Field(min_length=4, max_length=4)
    correct_option_index: int = Field(ge=0, le=3)


class QuestionUpdateRequest(BaseModel):
    question_text: str | None = Field(default=None, min_length=5, max_length=500)
    options: list[OptionText] | None = Field(default=None, min_length=4, max_length=4)
    correct_option_index: int | None = Field(default=None, ge=0, le=3)


class AnswerResultResponse(BaseModel):
    question_id: str
    question_text: str
    selected_option_index: int
    correct_option_index: int
    is_correct: bool
    options: list[str]


class ParticipationResponse(BaseModel):
    id: UUID
    quiz_id: UUID
    quiz_title: str
    participant_name: str
    score: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    percentage: float = Field(ge=0.0)
    completed_at: datetime
    results: list[AnswerResultResponse]


class ParticipationEnvelope(BaseModel):
    participation: ParticipationResponse


class ParticipantSummaryResponse(BaseModel):
    id: str
    participant_name: str
    score: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    percentage: float = Field(ge=0.0)
    completed_at: datetime


class ParticipantsEnvelope(BaseModel):
    participants: list[ParticipantSummaryResponse]


class QuizRefResponse(BaseModel):
    id: UUID
    title: str


class MostMissedQuestionResponse(BaseModel):
    id: str
    question_text: str
    miss_count: int = Field(ge=1)


class QuizStatsResponse(BaseModel):
    quiz: QuizRefResponse
    participant_count: int = Field(ge=0)
    average_score: float = Field(ge=0.0)
    average_percentage: float = Field(ge=0.0)
    most_missed_question: MostMissedQuestionResponse | None
    participants: list[ParticipantSummaryResponse]


class QuestionResponse(BaseModel):
    id: str
    quiz_id: UUID
    question_text: str
    options: list[str]
    correct_option_index: int
    order_index: int


class QuestionEnvelope(BaseModel):
    question: QuestionResponse


class QuizSummaryResponse(BaseModel):
    id: UUID
    title: str
    question_count: int = Field(ge=0)
    participant_count: int = Field(ge=0)
    created_at: datetime
    updated_at: datetime


class QuizSummaryEnvelope(BaseModel):
    quiz: QuizSummaryResponse


class QuizListEnvelope(BaseModel):
    quizzes: list[QuizSummaryResponse]


class OwnerQuestionResponse(BaseModel):
    id: str
    question_text: str
    options: list[str]
    correct_option_index: int
    order_index: int


class QuizDetailResponse(QuizSummaryResponse):
    questions: list[OwnerQuestionResponse]


class QuizDetailEnvelope(BaseModel):
    quiz: QuizDetailResponse


class PlayQuestionResponse(BaseModel):
    id: str
    question_text: str
    options: list[str]


class PlayableQuizResponse(BaseModel):
    id: UUID
    title: str
    creator_name: str
    questions: list[PlayQuestionResponse]


class PlayableQuizEnvelope(BaseModel):
    quiz: PlayableQuizResponse


class DeletedResponse(BaseModel):
    id: UUID
    deleted: bool = True
