class QuizServiceError(Exception):
    pass


class QuizNotFoundError(QuizServiceError):
    pass


class QuestionNotFoundError(QuizServiceError):
    pass


class ParticipationNotFoundError(QuizServiceError):
    pass


class QuizAccessForbiddenError(QuizServiceError):
    pass
