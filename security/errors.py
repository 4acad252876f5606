"""Error kinds raised by the token codec, the credential service and the auth gate.
"""


class AuthError(Exception):
    """Base exception for authentication failures."""

    code = "AUTH_ERROR"
    default_message = "Authentication failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AccountExists(AuthError):
    code = "ACCOUNT_EXISTS"
    default_message = "A user with this email already exists"


class InvalidCredentials(AuthError):
    code = "INVALID_CREDENTIALS"
    default_message = "Incorrect email or password"


class MissingToken(AuthError):
    code = "MISSING_TOKEN"
    default_message = "No token provided"


class InvalidToken(AuthError):
    """Raised when a token is malformed, forged or expired."""

    code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class AccountNotFound(AuthError):
    code = "ACCOUNT_NOT_FOUND"
    default_message = "User not found"


class Unauthorized(AuthError):
    """Raised by the auth gate. Never carries the underlying cause."""

    code = "UNAUTHORIZED"
    default_message = "Not authorized"


class ServiceUnavailable(AuthError):
    """Raised when the account store cannot be reached or fails."""

    code = "SERVICE_UNAVAILABLE"
    default_message = "Service temporarily unavailable"
