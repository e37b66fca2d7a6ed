"""Beta access requests: admin listing, status changes and invite tokens."""

from __future__ import annotations

import uuid
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from umshado.constants.beta_requests import BetaRequestStatus
from umshado.models.beta_request import BetaRequest


class BetaRequestService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_beta_request(self, request_id: UUID) -> Optional[BetaRequest]:
        return self.db.query(BetaRequest).filter(BetaRequest.id == request_id).first()

    def get_by_invite_token(self, token: UUID) -> Optional[BetaRequest]:
        return (
            self.db.query(BetaRequest)
            .filter(BetaRequest.invite_token == token)
            .first()
        )

    def get_beta_requests(self, skip: int = 0, limit: int = 500) -> List[BetaRequest]:
        """All requests, newest first."""
        return (
            self.db.query(BetaRequest)
            .order_by(BetaRequest.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def set_status(
        self, beta_request: BetaRequest, status: BetaRequestStatus
    ) -> BetaRequest:
        """Update status; approving issues an invite token when none exists."""
        beta_request.status = status.value
        if status == BetaRequestStatus.APPROVED and beta_request.invite_token is None:
            beta_request.invite_token = uuid.uuid4()
        self.db.commit()
        self.db.refresh(beta_request)
        return beta_request
