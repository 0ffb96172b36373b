"""Domain errors raised by the authentication flows.

Each error carries the HTTP status and the user-facing message it maps to.
The exception handlers in ``main`` render them as ``{"error": message}``.
"""


class AuthError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidCredentials(AuthError):
    status_code = 401
    message = "Invalid credentials"


class UserNotFound(AuthError):
    status_code = 404
    message = "User not found"


class UserAlreadyExists(AuthError):
    status_code = 400
    message = "Email already registered"


class InvalidOrExpiredToken(AuthError):
    status_code = 400
    message = "Invalid or expired reset token"


class EmailDeliveryError(AuthError):
    status_code = 500
    message = "Failed to send reset email"


class InternalError(AuthError):
    status_code = 500
    message = "Database error"
