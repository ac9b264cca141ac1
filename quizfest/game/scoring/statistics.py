from __future__ import annotations

from collections.abc import Mapping, Sequence

from quizfest.game.scoring.engine import compute_percentage, grade_answers
from quizfest.game.scoring.question_bank import build_question_bank
from quizfest.game.scoring.types import (
    MostMissedQuestion,
    ParticipantSummary,
    ParticipationRecord,
    QuestionView,
    QuizStats,
)


def _count_misses(
    bank: Mapping[str, QuestionView],
    participations: Sequence[ParticipationRecord],
) -> dict[str, int]:
    # Insertion order is first-miss order; the leader pick below depends on it.
    miss_counts: dict[str, int] = {}
    for participation in participations:
        graded = grade_answers(bank, participation.answers)
        for result in graded.results:
            if not result.is_correct:
                miss_counts[result.question_id] = miss_counts.get(result.question_id, 0) + 1
    return miss_counts


def pick_most_missed_question(
    bank: Mapping[str, QuestionView],
    miss_counts: Mapping[str, int],
) -> MostMissedQuestion | None:
    leader: MostMissedQuestion | None = None
    max_misses = -1
    for question_id, misses in miss_counts.items():
        if misses <= max_misses:
            continue
        question = bank.get(question_id)
        if question is None:
            continue
        max_misses = misses
        leader = MostMissedQuestion(
            question_id=question.question_id,
            question_text=question.text,
            miss_count=misses,
        )
    return leader


def summarize_participation(participation: ParticipationRecord) -> ParticipantSummary:
    return ParticipantSummary(
        participation_id=participation.participation_id,
        participant_name=participation.participant_name,
        score=participation.score,
        total_questions=participation.total_questions,
        percentage=compute_percentage(participation.score, participation.total_questions),
        completed_at=participation.completed_at,
    )


def aggregate_quiz_stats(
    questions: Sequence[QuestionView],
    participations: Sequence[ParticipationRecord],
) -> QuizStats:
    """Compute quiz-level statistics from stored participations.

    Scores and totals are read as stored. Per-answer correctness for the miss
    counters is regraded against ``questions``, the quiz's current question set.
    """
    bank = build_question_bank(questions)
    summaries = [summarize_participation(participation) for participation in participations]
    participant_count = len(summaries)

    average_score = 0.0
    average_percentage = 0.0
    if participant_count > 0:
        average_score = sum(summary.score for summary in summaries) / participant_count
        average_percentage = sum(summary.percentage for summary in summaries) / participant_count

    # sorted() is stable, so equal scores keep their input order.
    ranked = sorted(summaries, key=lambda summary: summary.score, reverse=True)

    return QuizStats(
        participant_count=participant_count,
        average_score=average_score,
        average_percentage=average_percentage,
        most_missed_question=pick_most_missed_question(bank, _count_misses(bank, participations)),
        participants=tuple(ranked),
    )
