class AppError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500
    message = "Something went wrong, try again later"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class Unauthorized(AppError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    message = "You have no rights over this note"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class Conflict(AppError):
    status_code = 409
    message = "Already exists"


class Internal(AppError):
    """Store failures and broken invariants. Never downgraded to a denial."""
