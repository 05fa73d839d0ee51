"""
Application-layer exceptions.

These exceptions are used across the engine, use cases and the API layer.
NotFound and PermissionDenied are raised before any write is attempted.
Failures after writes began are reported as PartialFailure values instead
(see domain.models.write_report).
"""

from typing import List, Optional

# Error codes for failures that are not HierarchyErrors.
INVALID_REQUEST = "invalid_request"
STORE_ERROR = "store_error"


class HierarchyError(Exception):
    """Base class for hierarchy engine errors."""

    code = "hierarchy_error"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class NotFound(HierarchyError):
    """The root document of an operation does not exist."""

    code = "not_found"


class PermissionDenied(HierarchyError):
    """The root document's ownerId does not match the caller."""

    code = "permission_denied"


class ValidationFailure(HierarchyError):
    """
    A source document is malformed.

    Raised while transforming a subtree; carries the offending path and the
    individual validation messages.
    """

    code = "validation_failed"

    def __init__(self, message: str, path: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message, path)
        self.errors = errors or []
