class QuestionError(Exception):
    pass


class QuestionValidationError(QuestionError):
    pass


class QuestionNotFoundError(QuestionError):
    pass


class LastQuestionDeleteError(QuestionError):
    pass
