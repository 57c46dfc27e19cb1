# common/api_error/ApiError.py
class AppError(Exception):
    """Base error for all application-specific issues."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)


class NotFoundError(AppError):
    """Keyed lookup, update or delete hit no row."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message, status_code=404, code=code)


class ConflictError(AppError):
    """Duplicate booking or duplicate unique value."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, status_code=400, code=code)


class InvalidReferenceError(AppError):
    """Referenced patient/doctor does not exist."""

    def __init__(self, message: str, code: str = "INVALID_REFERENCE"):
        super().__init__(message, status_code=400, code=code)


class DatabaseError(AppError):
    """Specific for DB issues. Never carries driver detail to the client."""

    def __init__(
        self,
        message: str = "Some error occurred. Please try again later.",
        code: str = "STORAGE_ERROR",
    ):
        super().__init__(message, status_code=400, code=code)


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""

    def __init__(
        self,
        message: str,
        status_code: int = 401,
        code: str = "UNAUTHORIZED",
    ):
        super().__init__(message, status_code=status_code, code=code)


__all__ = [
    "AppError",
    "NotFoundError",
    "ConflictError",
    "InvalidReferenceError",
    "DatabaseError",
    "AuthenticationError",
]
