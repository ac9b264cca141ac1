from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class QuestionView:
    question_id: str
    text: str
    options: tuple[str, ...]
    correct_option_index: int
    order_index: int = 0


@dataclass(frozen=True, slots=True)
class SubmittedAnswer:
    question_id: str
    selected_option_index: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "selected_option_index": self.selected_option_index,
        }


@dataclass(frozen=True, slots=True)
class AnswerResult:
    question_id: str
    question_text: str
    selected_option_index: int
    correct_option_index: int
    is_correct: bool
    options: tuple[str, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "question_id": self.question_id,
            "question_text": self.question_text,
            "selected_option_index": self.selected_option_index,
            "correct_option_index": self.correct_option_index,
            "is_correct": self.is_correct,
            "options": list(self.options),
        }


@dataclass(slots=True)
class GradedAnswers:
    score: int = 0
    results: list[AnswerResult] = field(default_factory=list)
    accepted_answers: list[SubmittedAnswer] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ScoredSubmission:
    score: int
    total_questions: int
    percentage: float
    results: tuple[AnswerResult, ...]
    accepted_answers: tuple[SubmittedAnswer, ...]

    def answers_payload(self) -> list[dict[str, Any]]:
        return [answer.to_payload() for answer in self.accepted_answers]


@dataclass(frozen=True, slots=True)
class ParticipationRecord:
    participation_id: str
    participant_name: str
    score: int
    total_questions: int
    answers: tuple[SubmittedAnswer, ...]
    completed_at: datetime


@dataclass(frozen=True, slots=True)
class ParticipantSummary:
    participation_id: str
    participant_name: str
    score: int
    total_questions: int
    percentage: float
    completed_at: datetime


@dataclass(frozen=True, slots=True)
class MostMissedQuestion:
    question_id: str
    question_text: str
    miss_count: int


@dataclass(frozen=True, slots=True)
class QuizStats:
    participant_count: int
    average_score: float
    average_percentage: float
    most_missed_question: MostMissedQuestion | None
    participants: tuple[ParticipantSummary, ...]
