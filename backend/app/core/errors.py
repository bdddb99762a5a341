# backend/app/core/errors.py


class EvaluationError(Exception):
    """Base class for every error the evaluation core raises on purpose."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EvaluationError):
    """Bad input: out-of-range score, missing field, malformed sub-score."""

    status_code = 400


class ConflictError(EvaluationError):
    """A uniqueness rule was violated, e.g. a second evaluation for the same intern on a form."""

    status_code = 409


class NotFoundError(EvaluationError):
    status_code = 404


class ComputationError(EvaluationError):
    status_code = 500
