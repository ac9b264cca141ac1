from quizfest.db.repo.participations_repo import ParticipationsRepo
from quizfest.db.repo.questions_repo import QuestionsRepo
from quizfest.db.repo.quizzes_repo import QuizzesRepo
from quizfest.db.repo.users_repo import UsersRepo

__all__ = [
    "ParticipationsRepo",
    "QuestionsRepo",
    "QuizzesRepo",
    "UsersRepo",
]
