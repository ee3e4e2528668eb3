"""
Inkwell Backend — Error Types
===============================

What:  The exceptions services, dependencies and middleware raise to end a
       request with a specific client-facing error.
How:   Every error carries `message` (safe to show) and `context` (for logs).
       main.register_exception_handlers turns each type into a JSON body.

Status mapping:
    InkwellError                 500  base / anything unclassified
    ├── ValidationError          400  bad field, sort key or body
    ├── UnauthorizedError        400  post ownership or role rule failed
    ├── AuthenticationError      401  no usable bearer token
    ├── ForbiddenError           403  role lacks a required right
    ├── NotFoundError            404  id not (or no longer) stored
    ├── ConflictError            409  constraint violation
    ├── DatabaseError            500  persistence failure after retries
    └── RateLimitExceededError   429  answered by RateLimitMiddleware

UnauthorizedError is a 400 whose message is exactly "Unauthorized"; API
clients match on that pair, which is why it does not share a type with the
401 and 403 errors.
"""

from typing import Any, Dict, Optional


class InkwellError(Exception):
    """
    Root of the application's error types.

    Subclasses override `default_message`; callers may still pass their own.
    `context` is logged by the handlers and only returned where a handler
    explicitly puts it in `details`.
    """

    default_message = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InkwellError):
    """
    Input the services cannot use: unknown projection or sort field, empty or
    non-writable update body.

    The handler returns `context` as `details`, e.g.
        {"field": "sortBy", "allowed": ["id", "title", ...]}
    """

    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        details = dict(context or {})
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class UnauthorizedError(InkwellError):
    """Reading someone else's post, or updating without being owner AND ADMIN."""

    default_message = "Unauthorized"


class AuthenticationError(InkwellError):
    """Missing, malformed, expired or foreign token, or a subject with no user row."""

    default_message = "Please authenticate"


class ForbiddenError(InkwellError):
    """The requester's role does not grant every right the route asks for."""

    default_message = "Forbidden"

    def __init__(
        self,
        message: Optional[str] = None,
        missing_rights: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        details = dict(context or {})
        if missing_rights:
            details["missing_rights"] = missing_rights
        super().__init__(message, details)


class NotFoundError(InkwellError):
    """
    The addressed row does not exist.

    Plain reads return None for a missing id; write paths and the routes that
    need the row raise this instead. The message is "<Resource> not found".
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        details = dict(context or {}, resource=resource)
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(f"{resource.capitalize()} not found", details)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(InkwellError):
    """A write broke a constraint, e.g. a post pointing at a missing category."""

    default_message = "The request conflicts with existing data."


class DatabaseError(InkwellError):
    """
    Persistence failed for a reason the client cannot fix.

    Clients only ever see a generic message; the handler logs `context`.
    """

    default_message = "A database error occurred. Please try again later."


class RateLimitExceededError(InkwellError):
    """
    Too many requests from one client address inside the window.

    `retry_after` (seconds) feeds both the body and the Retry-After header.
    """

    def __init__(self, retry_after: int = 60, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Too many requests. Please wait {retry_after} seconds before retrying.",
            dict(context or {}, retry_after=retry_after),
        )
        self.retry_after = retry_after
