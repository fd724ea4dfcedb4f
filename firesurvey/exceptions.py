"""
Fire Survey Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    FireSurveyError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── DuplicateEmailError      → 409 Conflict
    ├── NoSurveyRecordsError     → 500 Internal Server Error
    ├── DatabaseError            → 500 Internal Server Error
    └── GenerationServiceError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class FireSurveyError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FireSurveyError):
    """
    Raised when client input fails a presence check.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Fields 'email' and 'address' are required",
            "details": {"field": "email"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(FireSurveyError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DuplicateEmailError(FireSurveyError):
    """
    Raised when a survey is submitted for an email that is already stored.

    HTTP: 409 Conflict
    Detected by the UNIQUE constraint on survey_results.email at insert time.
    """

    def __init__(
        self,
        email: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["email"] = email
        super().__init__(message="This email is already registered", context=ctx)
        self.email = email


class NoSurveyRecordsError(FireSurveyError):
    """
    Raised when the alert address is requested but no survey has been stored.

    HTTP: 500 Internal Server Error (the alert device treats any non-200 as "no alert")
    """

    def __init__(
        self,
        message: str = "No address has been recorded yet",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(FireSurveyError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error
    The message returned to the client is always generic; the SQL error is
    only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class GenerationServiceError(FireSurveyError):
    """
    Raised when the text-generation service cannot be reached.

    HTTP: 500 Internal Server Error
    When:  Connection refused, timeout, or any other transport failure.
           Upstream HTTP error statuses are NOT errors: they are relayed as-is.
    """

    def __init__(
        self,
        message: str = "The text generation service is unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
