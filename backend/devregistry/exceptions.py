"""
Developer Registry — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the registry's failure modes.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    DevRegistryError (base)           → 500
    ├── ValidationError               → 400 Bad Request
    ├── NotFoundError                 → 404 Not Found
    ├── ReferentialIntegrityError     → 401 (level still referenced)
    └── ConnectivityError             → 500 (store unreachable or failed)
        └── FetchError                → 404 (a list query failed)

The 401 for ReferentialIntegrityError is part of the public contract:
clients detect a blocked level deletion by that status code.
"""

from typing import Any, Dict, Optional


class DevRegistryError(Exception):
    """
    Base exception for all registry errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the
                  handler chooses to expose it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DevRegistryError):
    """
    Raised when client input fails validation.

    When:    Empty name/sex/hobby, unparseable or future birth date,
             nivel_id pointing to a level that does not exist, unknown
             sort column.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Field 'nome' must not be empty",
            "details": {"field": "nome"}
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


class NotFoundError(DevRegistryError):
    """
    Raised when a requested record does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that into this exception so the handler can answer 404.
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


class ReferentialIntegrityError(DevRegistryError):
    """
    Raised when deleting a level that one or more developers still reference.

    HTTP:    401
    Recovery: the client must reassign or delete those developers first.
    """

    def __init__(
        self,
        level_id: Any = None,
        developer_count: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "This level has associated developers and cannot be deleted."
        ctx = context or {}
        if level_id is not None:
            ctx["level_id"] = level_id
        if developer_count is not None:
            ctx["developer_count"] = developer_count
        super().__init__(message=message, context=ctx)
        self.level_id = level_id
        self.developer_count = developer_count


class ConnectivityError(DevRegistryError):
    """
    Raised when the backing store is unreachable or a statement fails.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    exception type is kept in the context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FetchError(ConnectivityError):
    """
    Raised when listing a collection fails.

    HTTP:    404, matching the failure code published for the list endpoints.
    """

    def __init__(
        self,
        resource: str = "records",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=f"Failed to fetch {resource}", context=ctx)
