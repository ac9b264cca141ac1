from __future__ import annotations

from quizfest.game.scoring.types import AnswerResult, QuestionView, SubmittedAnswer


def is_answer_correct(question: QuestionView, answer: SubmittedAnswer) -> bool:
    # Out-of-range and negative indices never match, they are not an error.
    return answer.selected_option_index == question.correct_option_index


def grade_answer(question: QuestionView, answer: SubmittedAnswer) -> AnswerResult:
    return AnswerResult(
        question_id=question.question_id,
        question_text=question.text,
        selected_option_index=answer.selected_option_index,
        correct_option_index=question.correct_option_index,
        is_correct=is_answer_correct(question, answer),
        options=question.options,
    )
