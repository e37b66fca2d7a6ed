"""BetaRequest model: a request for private-beta access and its invite token."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Uuid

from umshado.constants.beta_requests import BetaRequestStatus
from umshado.db import Base
from umshado.models.mixins import TimestampMixin


class BetaRequest(Base, TimestampMixin):
    __tablename__ = "beta_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(256), nullable=True)
    email = Column(String(320), nullable=False, index=True)
    role_interest = Column(String(16), nullable=True)
    status = Column(
        String(16), nullable=False, default=BetaRequestStatus.PENDING.value
    )
    invite_token = Column(Uuid, unique=True, nullable=True)
