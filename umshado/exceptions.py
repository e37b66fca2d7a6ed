"""
Error taxonomy for the marketplace API.

Commands raise these; ``create_app`` renders them as ``{"error": ...}`` with
the matching HTTP status. Best-effort side effects never raise them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class UmshadoError(Exception):
    """Base error carrying an HTTP status and optional extra payload fields."""

    status_code = 500

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class InputError(UmshadoError):
    """Missing or malformed required fields. Raised before any write."""

    status_code = 400


class AuthError(UmshadoError):
    """Missing or invalid bearer token."""

    status_code = 401


class AuthorizationError(UmshadoError):
    """Authenticated caller is not a participant/owner of the target."""

    status_code = 403


class NotFoundError(UmshadoError):
    status_code = 404


class InvalidTransition(UmshadoError):
    """Requested quote status change is not allowed from the current state."""

    status_code = 409


class StoreError(UmshadoError):
    """The store rejected a primary-path read or write."""

    status_code = 500


class PartialFailure(UmshadoError):
    """
    A primary write succeeded but a dependent one failed.

    ``extra`` carries the identifiers of what was created so the client can
    retry the remaining step.
    """

    status_code = 500


class GoneError(UmshadoError):
    """The resource existed but has been consumed (e.g. a redeemed invite)."""

    status_code = 410
