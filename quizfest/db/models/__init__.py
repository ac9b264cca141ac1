from quizfest.db.models.participations import Participation
from quizfest.db.models.questions import Question
from quizfest.db.models.quizzes import Quiz
from quizfest.db.models.users import User

__all__ = [
    "Participation",
    "Question",
    "Quiz",
    "User",
]
