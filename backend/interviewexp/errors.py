"""Error taxonomy shared by services and routers.

Services raise these; the handlers registered in ``main.py`` render them
into the standard ``{success, message, error}`` envelope.
"""


class AppError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class AuthenticationError(AppError):
    status_code = 401
    error = "Unauthorized"


class AuthorizationError(AppError):
    status_code = 403
    error = "Forbidden"


class ValidationError(AppError):
    status_code = 400
    error = "Validation Error"


class NotFoundError(AppError):
    status_code = 404
    error = "Not Found"


class InvalidStatusError(AppError):
    """A moderation transition was attempted from a non-pending state."""

    status_code = 400
    error = "Invalid Status"


class ConflictError(AppError):
    status_code = 409
    error = "Conflict"
