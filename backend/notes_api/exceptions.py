"""
Notes Service: Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions, one class per error kind.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch them by
       type and answer with the matching HTTP status and a plain-text body.
Who:   Raised by the storage and service layers and by route handlers.

Exception Hierarchy:
    NotesError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NoChangeError     → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 500 Internal Server Error

The kind of an error is its class. Callers never inspect `message` to decide
what happened.
"""

from typing import Any, Dict, Optional


class NotesError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesError):
    """
    Raised when client input fails validation.

    When:    Request body cannot be decoded, or a required field is empty.
    HTTP:    400 Bad Request
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


class NotFoundError(NotesError):
    """
    Raised when no note matches the given identifier.

    When:    get_by_id finds no row; update/delete affect zero rows.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with id {resource_id} was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class NoChangeError(NotesError):
    """
    Raised when an edit would leave the note exactly as it is.

    When:    Both submitted fields are empty or equal to the stored values.
    HTTP:    400 Bad Request
    """

    def __init__(self, note_id: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["note_id"] = note_id
        super().__init__(message="nothing to change", context=ctx)
        self.note_id = note_id


class StorageError(NotesError):
    """
    Raised when a database operation fails for any reason other than a
    missing row.

    When:    Driver error, locked database, query deadline exceeded.
    HTTP:    500 Internal Server Error

    The message returned to the client stays generic; the driver error is
    kept in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
