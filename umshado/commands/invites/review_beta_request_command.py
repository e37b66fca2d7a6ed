"""
Command for admins to list and review beta access requests.

Approving a request issues its invite token and, when the requester already
has an account, sends them an in-app welcome notification. The notification
is best effort and never fails the approval.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from uuid import UUID

import requests
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from umshado.adapters.auth_provider import AuthProviderClient
from umshado.constants.beta_requests import ACTION_STATUS_MAP, BetaRequestStatus
from umshado.constants.notifications import NotificationType
from umshado.exceptions import InputError, NotFoundError, StoreError
from umshado.models.beta_request import BetaRequest
from umshado.schemas.beta_request import BetaRequestListRow
from umshado.services.beta_request_service import BetaRequestService
from umshado.services.notification_service import NotificationService


class ReviewBetaRequestCommand:
    def __init__(self, db: Session, auth_client: AuthProviderClient) -> None:
        self.db = db
        self.auth_client = auth_client
        self.beta_request_service = BetaRequestService(db)
        self.notification_service = NotificationService(db)
        self.logger = logging.getLogger(__name__)

    def list_requests(self) -> List[BetaRequestListRow]:
        """All requests, newest first, flagged with whether the email has an account."""
        rows = []
        cache: Dict[str, bool] = {}
        for beta_request in self.beta_request_service.get_beta_requests():
            email = beta_request.email.lower()
            if email not in cache:
                cache[email] = self._lookup_user_id(email) is not None
            row = BetaRequestListRow.model_validate(beta_request)
            row.registered = cache[email]
            rows.append(row)
        return rows

    def execute(self, action: Optional[str], request_id: Optional[UUID]) -> BetaRequest:
        """
        Apply an admin action (approve, revoke, pending, redeem).

        Raises:
            InputError: missing or unknown action, missing id.
            NotFoundError: unknown request.
            StoreError: the status update failed.
        """
        if not action or request_id is None:
            raise InputError("Missing required fields: action, id")
        status = ACTION_STATUS_MAP.get(action)
        if status is None:
            raise InputError(
                f"Invalid action. Must be one of: {', '.join(ACTION_STATUS_MAP)}"
            )

        beta_request = self.beta_request_service.get_beta_request(request_id)
        if beta_request is None:
            raise NotFoundError("Beta request not found")
        try:
            beta_request = self.beta_request_service.set_status(beta_request, status)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error("Beta request %s update failed: %s", request_id, e)
            raise StoreError("Failed to update beta request") from e

        if status == BetaRequestStatus.APPROVED:
            self._notify_approved(beta_request)
        return beta_request

    def _lookup_user_id(self, email: str) -> Optional[str]:
        try:
            return self.auth_client.find_user_id_by_email(email)
        except (requests.RequestException, RuntimeError, ValueError) as e:
            self.logger.warning("Auth user lookup failed for %s: %s", email, e)
            return None

    def _notify_approved(self, beta_request: BetaRequest) -> None:
        user_id = self._lookup_user_id(beta_request.email)
        if user_id is None:
            self.logger.info(
                "No account yet for approved beta request %s", beta_request.id
            )
            return
        self.notification_service.dispatch(
            [user_id],
            NotificationType.INVITE_APPROVED,
            title="Welcome to uMshado! 🎉",
            body="Your beta access has been approved. Start exploring!",
            link="/",
            meta={"betaRequestId": str(beta_request.id)},
        )
