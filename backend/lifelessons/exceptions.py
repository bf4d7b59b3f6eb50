"""
Digital Life Lessons API — Custom Exception Hierarchy
=======================================================

What:  Application-specific exceptions for the error scenarios the API exposes.
Why:   Services raise these instead of building responses; global handlers
       registered in main.py turn them into JSON bodies with the right status.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    LifeLessonsError (base)
    ├── ConflictError     → 400 Bad Request (duplicate report)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

Duplicate favorites and duplicate users are not errors: those endpoints answer
200 with an "already ..." message. Only duplicate reports use ConflictError.
"""

from typing import Any, Dict, Optional


class LifeLessonsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConflictError(LifeLessonsError):
    """
    Raised when a write would violate a one-per-pair rule.

    When:  A reporter submits a second report for the same lesson.
    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(LifeLessonsError):
    """
    Raised when a referenced document does not exist.

    When:  GET /lessons/{id} or PATCH /lessons/{id}/like with an unknown id,
           including ids that are not valid ObjectIds.
    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(LifeLessonsError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP: 500 Internal Server Error

    The message is fixed per operation ("Failed to fetch lessons"); the
    original driver error is only logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
