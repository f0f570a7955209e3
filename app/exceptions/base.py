# ruff: noqa: D107
"""Base exception classes."""

from typing import Any

from fastapi import HTTPException


class BaseAppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={"message": message, "error_code": error_code, "details": details},
            headers=headers,
        )


class NotFoundError(BaseAppException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
        error_code: str = "NOT_FOUND",
    ):
        super().__init__(message=message, status_code=404, error_code=error_code, details=details)


class BadRequestError(BaseAppException):
    """Exception raised when a request references missing data or cannot be applied."""

    def __init__(
        self,
        message: str = "Bad request",
        details: dict[str, Any] | None = None,
        error_code: str = "BAD_REQUEST",
    ):
        super().__init__(message=message, status_code=400, error_code=error_code, details=details)


class ConflictError(BaseAppException):
    """Exception raised when a change collides with an existing record."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: dict[str, Any] | None = None,
        error_code: str = "CONFLICT",
    ):
        super().__init__(message=message, status_code=409, error_code=error_code, details=details)


class PreconditionFailedError(BaseAppException):
    """Exception raised when an If-Match header no longer matches the stored entity."""

    def __init__(
        self,
        message: str = "Resource has been modified",
        details: dict[str, Any] | None = None,
        etag: str | None = None,
    ):
        super().__init__(
            message=message,
            status_code=412,
            error_code="PRECONDITION_FAILED",
            details=details,
            headers={"ETag": etag} if etag else None,
        )
