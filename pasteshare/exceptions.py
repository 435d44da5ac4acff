"""
PasteShare Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the three failure kinds a paste
       operation can have.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the paste repository; caught by the handlers in main.py.

Exception Hierarchy:
    PasteShareError (base)   → 500 Internal Server Error
    ├── ValidationError      → 400 Bad Request (input rejected before any store call)
    ├── NotFoundError        → 404 Not Found (no such row, never a transient failure)
    └── StoreError           → 500 Internal Server Error (store call failed, not retried)
"""

from typing import Any, Dict, Optional


class PasteShareError(Exception):
    """
    Base exception for all PasteShare application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only as `details`
                  where the handler chooses to)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PasteShareError):
    """
    Raised when paste input fails a business rule.

    When:    Content is empty after trimming, or a page number below 1.
    HTTP:    400 Bad Request

    Schema-level problems (missing body fields, wrong types) are still
    reported by FastAPI as 422; this exception covers the rules the
    repository itself enforces.

    Example response:
        {
            "error": "validation_error",
            "message": "Content is required",
            "details": {"field": "content"}
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


class NotFoundError(PasteShareError):
    """
    Raised when a requested paste does not exist.

    When:    GET/PUT /api/pastes/{id} with an id that matches no row.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the repository converts that
    None into this exception so callers never confuse "absent" with a
    failed query.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(PasteShareError):
    """
    Raised when the pastes store rejects or fails a query.

    What:    Connection loss, constraint violation, permission error, etc.
    HTTP:    500 Internal Server Error

    The store's own message is kept in `store_message` and appended to the
    user-facing message. The operation is not retried and nothing is
    rolled back locally, since no local write happened.
    """

    def __init__(
        self,
        message: str = "The paste store could not complete the request",
        store_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if store_message:
            ctx["store_message"] = store_message
            message = f"{message}: {store_message}"
        super().__init__(message=message, context=ctx)
        self.store_message = store_message
