from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from quizfest.game.scoring.types import AnswerResult, ParticipantSummary, QuestionView, QuizStats


@dataclass(slots=True)
class ParticipationOutcome:
    participation_id: UUID
    quiz_id: UUID
    quiz_title: str
    participant_name: str
    score: int
    total_questions: int
    percentage: float
    completed_at: datetime
    results: list[AnswerResult]


@dataclass(slots=True)
class QuizStatsOutcome:
    quiz_id: UUID
    quiz_title: str
    stats: QuizStats


@dataclass(slots=True)
class QuizParticipantsOutcome:
    quiz_id: UUID
    participants: list[ParticipantSummary]


@dataclass(slots=True)
class QuizSummary:
    quiz_id: UUID
    title: str
    question_count: int
    participant_count: int
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class QuizDetail:
    summary: QuizSummary
    questions: list[QuestionView]


@dataclass(slots=True)
class PlayableQuiz:
    quiz_id: UUID
    title: str
    creator_name: str
    questions: list[QuestionView]


@dataclass(slots=True)
class QuestionSnapshot:
    quiz_id: UUID
    question: QuestionView
