"""
Happy Thoughts API — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions raised by services and dependencies.
How:   Each exception carries a user-facing message and an optional context
       dict. Handlers registered in main.py turn them into response envelopes:

           {"success": false, "response": {...}, "message": "..."}

Exception Hierarchy:
    HappyThoughtsError (base)
    ├── ValidationError          → 500 (clients of this API expect 500 here)
    ├── NotFoundError            → 404
    │   └── NoMatchesError       → 404 with an empty list as the response
    ├── AuthError                → 401
    ├── DuplicateError           → 400
    ├── DatabaseError            → 500
    └── RateLimitExceededError   → 429
"""

from typing import Any, Dict, Optional


class HappyThoughtsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HappyThoughtsError):
    """
    Raised when input fails a declared constraint.

    When:  Empty password, unparseable filter value, schema constraint violated.
    HTTP:  500 Internal Server Error. Existing clients treat any failed write as
           a 500, so the status is kept even though 400 would be more accurate.
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


class NotFoundError(HappyThoughtsError):
    """
    Raised when a record with the requested id does not exist.

    SQLAlchemy returns None for missing rows; services convert that into this
    exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class NoMatchesError(NotFoundError):
    """
    Raised when a list query matches zero records.

    HTTP:  404 with `response: []`. An empty result is reported as "no matches"
           instead of a 200 with an empty list.
    """

    def __init__(self, resource: str = "records", context: Optional[Dict[str, Any]] = None):
        super().__init__(
            resource=resource,
            message=f"No {resource} matched the given filters",
            context=context,
        )


class AuthError(HappyThoughtsError):
    """
    Raised when a request carries no valid access token or login fails.

    HTTP:  401 Unauthorized with a `WWW-Authenticate: Bearer` header.
    """

    def __init__(
        self,
        message: str = "Access denied: a valid access token is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DuplicateError(HappyThoughtsError):
    """
    Raised when registration collides with an existing username or email.

    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "A user with that username or email already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(HappyThoughtsError):
    """
    Raised when a store operation fails for any reason not classified above.

    When:  Malformed id, connection lost, constraint violation on update, etc.
    HTTP:  500 Internal Server Error

    The client always gets a generic message; the SQL error text stays in
    server-side logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(HappyThoughtsError):
    """
    Describes a client that exceeded the per-IP request rate limit.

    HTTP:  429 Too Many Requests, with a Retry-After header. RateLimitMiddleware
           runs outside the exception handlers, so it builds the 429 envelope
           from this exception itself instead of raising it.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
