"""
Custom Exception Classes

This module defines custom exceptions for consistent error responses across
the publications API and for the client-side guards of the authoring session.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes, stable for front-end localisation."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"

    AUTH_FAILED = "AUTH_FAILED"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ARTICLE_NOT_FOUND = "RESOURCE_ARTICLE_NOT_FOUND"

    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    VALIDATION_UNSUPPORTED_LOCALE = "VALIDATION_UNSUPPORTED_LOCALE"

    PUBLISH_INCOMPLETE_TRANSLATIONS = "PUBLISH_INCOMPLETE_TRANSLATIONS"
    STATUS_TRANSITION_INVALID = "STATUS_TRANSITION_INVALID"
    PERSIST_IN_FLIGHT = "PERSIST_IN_FLIGHT"


class CMSError(Exception):
    """Base exception class for all publication errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CMSError):
    """Base class for resource not found errors"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any | None = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ArticleNotFoundError(ResourceNotFoundError):
    """Raised when an article is missing or has nothing readable in the requested locale"""

    def __init__(self, article_id: Any | None = None):
        super().__init__(
            resource_type="Article",
            resource_id=article_id,
            error_code=ErrorCode.RESOURCE_ARTICLE_NOT_FOUND,
        )


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(CMSError):
    """Raised when input validation fails"""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        error_code: ErrorCode = ErrorCode.VALIDATION_FAILED,
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status_code, error_code=error_code, details=error_details)


class UnsupportedLocaleError(ValidationError):
    """Raised when a locale outside the supported set reaches a write path"""

    def __init__(self, locale: str, supported: list[str]):
        super().__init__(
            message=f"Locale '{locale}' is not supported",
            field="locale",
            details={"locale": locale, "supported": supported},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code=ErrorCode.VALIDATION_UNSUPPORTED_LOCALE,
        )


class PublishNotAllowedError(ValidationError):
    """Raised when publishing without a complete translation for every locale"""

    def __init__(self, missing_locales: list[str]):
        super().__init__(
            message="Every locale needs a title and a body before publishing",
            details={"missing_locales": missing_locales},
            error_code=ErrorCode.PUBLISH_INCOMPLETE_TRANSLATIONS,
        )


class InvalidStatusTransitionError(CMSError):
    """Raised when an invalid status transition is attempted"""

    def __init__(self, current_status: str, target_status: str, resource_type: str = "Article"):
        super().__init__(
            message=f"Cannot transition {resource_type} from '{current_status}' to '{target_status}'",
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.STATUS_TRANSITION_INVALID,
            details={"resource_type": resource_type, "current_status": current_status, "target_status": target_status},
        )


class PersistInFlightError(CMSError):
    """Raised when a save, publish or archive starts while another is pending"""

    def __init__(self, pending_action: str):
        super().__init__(
            message=f"A '{pending_action}' is already in progress",
            status_code=status.HTTP_409_CONFLICT,
            error_code=ErrorCode.PERSIST_IN_FLIGHT,
            details={"pending_action": pending_action},
        )


# ============================================================================
# Database & Service Exceptions
# ============================================================================


class DatabaseError(CMSError):
    """Raised when a database operation fails"""

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=ErrorCode.DATABASE_ERROR,
            details=details,
        )
