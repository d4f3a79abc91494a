"""
Custom exceptions for repository-related operations.
"""

from typing import Iterable


class RepositoryError(Exception):
    """
    Base exception for repository/driver errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of argument/field names related to the error (e.g., ['offset'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'not_found', 'invalid_argument') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "invalid_argument": 422,
        "integrity_violation": 500,
        # fallback: default to 400 for general repository errors
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "invalid_argument",    # optional canonical code
                "fields": ["limit"],           # optional list for client usage
            }
        The constraint name is deliberately left out of the payload.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error,
        400 when the error_code is unknown or missing.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class InvalidArgumentError(RepositoryError):
    """Raised when pagination or sorting input is rejected before any query is built."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_argument")


class IntegrityViolationError(RepositoryError):
    """
    Raised when a lookup that must be unique matches several rows.

    This means an upstream uniqueness invariant is broken (data corruption),
    which is a different situation from "nothing found".
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="integrity_violation")


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidArgumentError",
    "IntegrityViolationError",
]
