"""
Exception hierarchy for the back office API.

Services raise these; the handlers registered in backend.app.main turn them
into JSON responses of the form {"success": false, "error": "..."}.

Usage:
    from backend.app.core.exceptions import NotFoundError

    raise NotFoundError("order", order_id)
"""
from __future__ import annotations

from typing import Any


class BackOfficeError(Exception):
    """
    Base exception for all back office errors.

    Attributes:
        message: human readable message, returned as "error"
        status_code: HTTP status code to return
        details: extra context, returned as "details" when not empty
    """

    status_code: int = 500

    def __init__(self, message: str = "unexpected error", *, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": False, "error": self.message}
        if self.details:
            result["details"] = self.details
        return result


# ---------- 400 ----------
class ValidationError(BackOfficeError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str = "validation failed",
        *,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details=details)


class InvalidStatusError(ValidationError):
    """Raised when a status text does not canonicalize to a known order status."""

    def __init__(self, value: Any = None):
        super().__init__("invalid status", field="durum", value=value)


# ---------- 404 ----------
class NotFoundError(BackOfficeError):
    """Raised when a referenced row does not exist."""

    status_code = 404

    def __init__(self, resource: str = "resource", resource_id: Any = None):
        details: dict[str, Any] = {}
        if resource_id is not None:
            details["id"] = str(resource_id)
        super().__init__(f"{resource} not found", details=details)


# ---------- 409 ----------
class DuplicateError(BackOfficeError):
    """Raised when creating a row that collides with a unique key."""

    status_code = 409

    def __init__(self, resource: str = "resource", *, field: str | None = None, value: Any = None):
        message = f"{resource} already exists"
        if field and value is not None:
            message = f"{resource} with {field}='{value}' already exists"
        super().__init__(message)


# ---------- 500 ----------
class TransactionError(BackOfficeError):
    """
    Raised when a database transaction had to be rolled back.

    retryable is True for lock timeouts and lost connections: the caller
    may safely repeat the request since nothing was committed.
    """

    status_code = 500

    def __init__(self, message: str = "transaction failed", *, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message, details={"retryable": retryable})
