"""Domain error taxonomy mapped onto HTTP status codes."""


class GameReviewsError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(GameReviewsError):
    """Raised when a field is missing, empty or out of range."""

    status_code = 400
    default_message = "The request is invalid."


class UnauthenticatedError(GameReviewsError):
    """Raised when a token is missing, invalid or expired."""

    status_code = 401
    default_message = "Could not validate credentials."


class ForbiddenError(GameReviewsError):
    """Raised when the caller is authenticated but not allowed to act."""

    status_code = 403
    default_message = "You are not allowed to perform this action."


class NotFoundError(GameReviewsError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    default_message = "Resource not found."


class ConflictError(GameReviewsError):
    """Raised when a uniqueness rule or invariant would be violated."""

    status_code = 409
    default_message = "The request conflicts with existing data."


class StorageError(GameReviewsError):
    """Raised when the persistent store fails unexpectedly.

    The message returned to callers is always the generic default; details
    are only written to the log.
    """

    status_code = 500
    default_message = "An unexpected database error occurred."
