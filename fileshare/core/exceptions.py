"""Error taxonomy for the file-sharing service.

Every error carries the HTTP status it maps to and a public message. The
message is what the caller sees, so it must never reveal whether a username
or file id exists when the caller is not entitled to know.
"""


class FileShareError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(FileShareError):
    """No credential was presented on a protected route."""

    status_code = 401
    message = "Unauthorized"


class MissingToken(Unauthorized):
    """Raised by the token verifier when the token is empty."""


class InvalidToken(FileShareError):
    """Signature, format, algorithm or subject check failed."""

    status_code = 401
    message = "Invalid token"


class UserNotFound(FileShareError):
    status_code = 401
    message = "User not found"


class InvalidCredentials(FileShareError):
    status_code = 401
    message = "Invalid password"


class DuplicateUser(FileShareError):
    status_code = 409
    message = "Username already exists"


class NotFound(FileShareError):
    """Owner-scoped lookup missed."""

    status_code = 404
    message = "File not found"


class InvalidCode(FileShareError):
    """Download gate failed.

    Raised both for an unknown file id and for a wrong code.
    """

    status_code = 403
    message = "Invalid code"


class StorageWriteFailure(FileShareError):
    status_code = 500
    message = "Failed to store file"


class StorageReadFailure(FileShareError):
    status_code = 500
    message = "Failed to read file"


class StorageError(Exception):
    """Raised by blob storage backends when an operation fails."""

    def __init__(self, operation: str, location: str) -> None:
        self.operation = operation
        self.location = location
        super().__init__(f"Blob {operation} failed: {location}")
