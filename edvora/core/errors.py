"""Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe to
show to the client. ``edvora.main`` turns them into the
``{"success": false, "error": ...}`` envelope.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class DuplicateField(AppError):
    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} already exists")


class InvalidCredential(AppError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class TokenMissing(AppError):
    status_code = 401
    default_message = "Access token required"


class TokenInvalid(AppError):
    status_code = 403
    default_message = "Invalid or expired token"


class TokenExpired(AppError):
    status_code = 403
    default_message = "Invalid or expired token"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"
