class QuizError(Exception):
    """Base class for recoverable quiz engine errors.

    ``status_code`` is the HTTP status the web layer answers with.
    """

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class BankLoadFailure(QuizError):
    status_code = 503


class BankNotLoaded(QuizError):
    status_code = 503


class InvalidSampleCount(QuizError, ValueError):
    status_code = 400


class NavigationOutOfBounds(QuizError, IndexError):
    status_code = 400


class InvalidAnswer(QuizError, ValueError):
    status_code = 400


class HistoryIndexNotFound(QuizError, LookupError):
    status_code = 404


class NoActiveSession(QuizError):
    status_code = 409


class NoResultAvailable(QuizError):
    status_code = 409
