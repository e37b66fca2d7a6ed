"""Command to validate and redeem beta invite tokens (no login required)."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from umshado.constants.beta_requests import BetaRequestStatus
from umshado.exceptions import (
    AuthorizationError,
    GoneError,
    InputError,
    NotFoundError,
    StoreError,
)
from umshado.models.beta_request import BetaRequest
from umshado.schemas.beta_request import InviteDetails
from umshado.services.beta_request_service import BetaRequestService

INVALID = {"valid": False}


def parse_token(token: Optional[str]) -> UUID:
    if not token:
        raise InputError("No token provided", extra=INVALID)
    try:
        return UUID(token)
    except ValueError as e:
        raise InputError("Invalid token format", extra=INVALID) from e


class InviteTokenCommand:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.beta_request_service = BetaRequestService(db)
        self.logger = logging.getLogger(__name__)

    def _find(self, token: Optional[str]) -> BetaRequest:
        beta_request = self.beta_request_service.get_by_invite_token(parse_token(token))
        if beta_request is None:
            raise NotFoundError("Invite not found", extra=INVALID)
        return beta_request

    def validate(self, token: Optional[str]) -> InviteDetails:
        """
        Check that the token belongs to an approved, unredeemed invite.

        Raises:
            InputError: missing or malformed token.
            NotFoundError: unknown token.
            GoneError: the invite was already redeemed.
            AuthorizationError: the request has not been approved.
        """
        beta_request = self._find(token)
        if beta_request.status == BetaRequestStatus.REDEEMED.value:
            raise GoneError(
                "This invite has already been used",
                extra={**INVALID, "status": beta_request.status},
            )
        if beta_request.status != BetaRequestStatus.APPROVED.value:
            raise AuthorizationError(
                "This invite has not been approved yet",
                extra={**INVALID, "status": beta_request.status},
            )
        return InviteDetails(
            email=beta_request.email,
            name=beta_request.name,
            role=beta_request.role_interest,
        )

    def redeem(self, token: Optional[str]) -> BetaRequest:
        """Mark the invite redeemed after a successful sign-up."""
        beta_request = self._find(token)
        try:
            return self.beta_request_service.set_status(
                beta_request, BetaRequestStatus.REDEEMED
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error("Redeeming invite %s failed: %s", beta_request.id, e)
            raise StoreError("Failed to redeem invite") from e
