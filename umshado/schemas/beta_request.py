"""Pydantic schemas for beta access requests and invite tokens."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from umshado.schemas.base import CamelModel


class BetaRequestRead(BaseModel):
    id: UUID
    name: Optional[str] = None
    email: str
    role_interest: Optional[str] = None
    status: str
    invite_token: Optional[UUID] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BetaRequestListRow(BetaRequestRead):
    registered: bool = False


class BetaRequestAction(BaseModel):
    action: Optional[str] = None
    id: Optional[UUID] = None


class InviteRedeemRequest(CamelModel):
    token: Optional[str] = None


class InviteDetails(BaseModel):
    email: str
    name: Optional[str] = None
    role: Optional[str] = None
