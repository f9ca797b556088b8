"""
Notes Backend — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. The handlers registered by `noteapp.middleware.errors` catch
       these and return JSON bodies with the matching HTTP status code.
Who:   Raised by services and request dependencies; caught by the handlers.
When:  During request processing, and once at startup for connectivity.

Exception Hierarchy:
    NoteAppError (base)
    ├── ValidationError      → 400 Bad Request
    ├── AuthenticationError  → 401 Unauthorized
    ├── AuthorizationError   → 403 Forbidden
    ├── NotFoundError        → 404 Not Found
    ├── DatabaseError        → 500 Internal Server Error
    └── ConnectivityError    → fatal at startup (never reaches a handler)

Routes never catch these individually. A new failing operation only has to
raise the right type.
"""

from typing import Any, Dict, List, Optional, Sequence, Union


class NoteAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteAppError):
    """
    Raised when client input fails a business rule.

    What:    Bad or duplicate field value, failed constraint, malformed query
             parameter.
    HTTP:    400 Bad Request

    The response `error` field is the list of messages, one per failure:
        {"error": ["username must be unique"]}
    """

    status_code = 400

    def __init__(
        self,
        messages: Union[str, Sequence[str]] = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if isinstance(messages, str):
            messages = [messages]
        self.messages: List[str] = list(messages)
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message="; ".join(self.messages), context=ctx)
        self.field = field


class AuthenticationError(NoteAppError):
    """
    Raised when the caller's identity cannot be established.

    When:    Missing, malformed, invalid or expired bearer token; bad login
             credentials; token naming a user that no longer exists.
    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(NoteAppError):
    """
    Raised when an authenticated caller acts on someone else's resource.

    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "operation not permitted",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NoteAppError):
    """
    Raised when a requested resource does not exist.

    What:    The client asked for a row that isn't in the database.
    When:    GET /api/notes/{id} with an unknown id, PUT /api/users/{username}
             for an unknown username.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception.
    """

    status_code = 404

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


class DatabaseError(NoteAppError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The underlying
    SQLAlchemy error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConnectivityError(NoteAppError):
    """
    Raised when the relational store is unreachable or misconfigured.

    When:    `Database.connect()` during application startup.
    Effect:  Startup aborts and the process exits. A single attempt is made.
    """

    def __init__(
        self,
        message: str = "Could not connect to the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
