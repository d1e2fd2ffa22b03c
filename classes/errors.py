class ScoringError(Exception):
    """Base for conditions the scoring core reports back to the caller."""
    status_code = 400
    message = "Bad request"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class QuizNotFound(ScoringError):
    status_code = 404
    message = "Quiz not found"


class QuizNotPublished(ScoringError):
    status_code = 403
    message = "Quiz is not published"


class ResultNotFound(ScoringError):
    status_code = 404
    message = "Result not found"


class AccessDenied(ScoringError):
    status_code = 403
    message = "Access denied"


class StorageError(ScoringError):
    status_code = 500
    message = "Internal server error"
