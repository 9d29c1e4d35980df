class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    status_code = 400


class ConflictError(DomainError):
    """Raised when a unique value (e.g. email) is already taken."""

    status_code = 400


class UnsupportedTypeError(DomainError):
    """Raised when an uploaded file's MIME type is not allowed."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when login credentials or a bearer token are invalid."""

    status_code = 401


class NotFoundError(DomainError):
    """Raised when an id does not resolve to a row."""

    status_code = 404


class StorageError(DomainError):
    """Raised for database or filesystem failures that are not the caller's fault."""

    status_code = 500


AuthError = AuthenticationError
