"""
Domain errors raised by the auth layer.

Each error carries the message shown to the client and the HTTP status the
API boundary answers with.  The boundary may collapse every status to 400
(``config.uniform_error_status``).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from fastapi import status


class AuthModuleError(Exception):
    """Base class for every error surfaced by the auth module."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AuthModuleError):
    """Payload failed schema validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    @classmethod
    def from_errors(cls, errors: Sequence[Dict[str, Any]]) -> "ValidationError":
        """Build from a pydantic error list, keeping only the first violation."""
        if not errors:
            return cls("Invalid request body")
        first = errors[0]
        loc = [str(part) for part in first.get("loc", ()) if part != "body"]
        return cls(first.get("msg", "Invalid request body"), ".".join(loc) or None)


class ConflictError(AuthModuleError):
    status_code = status.HTTP_409_CONFLICT


class AuthError(AuthModuleError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StoreError(AuthModuleError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
