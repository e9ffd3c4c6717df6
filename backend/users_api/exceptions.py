"""
Users API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions raised by the user store.
How:   Each exception carries a message and a context dict. Global exception
       handlers (registered in main.py) catch these and return structured
       JSON error responses with the matching HTTP status code.
Who:   Raised by UserStore; caught by the handlers in main.py.

Exception Hierarchy:
    UsersApiError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    └── NotFoundError     → 404 Not Found

Both are terminal and deterministic: the same input always produces the same
error, so nothing in the service retries them.
"""

from typing import Any, Dict, List, Optional, Sequence


class UsersApiError(Exception):
    """
    Base exception for all Users API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned only where a
                  handler chooses to expose it as `details`)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(UsersApiError):
    """
    Raised when one or more required fields are missing or empty.

    When:    create() without a name or email, or update() with a field that
             was supplied but is blank.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing or empty required field(s): name",
            "details": {"fields": ["name"]}
        }
    """

    def __init__(
        self,
        fields: Sequence[str],
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.fields: List[str] = list(fields)
        if message is None:
            message = "Missing or empty required field(s): " + ", ".join(self.fields)
        ctx = context or {}
        ctx["fields"] = self.fields
        super().__init__(message=message, context=ctx)


class NotFoundError(UsersApiError):
    """
    Raised when a requested resource does not exist.

    When:    Any id-addressed operation (get, update, delete) on an id that is
             not currently in the store, including ids that were deleted.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id
