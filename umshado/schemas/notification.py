"""Pydantic schemas for notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from umshado.schemas.base import CamelModel


class NotificationRead(CamelModel):
    id: UUID
    user_id: UUID
    type: str
    title: str
    body: str
    link: Optional[str] = None
    is_read: bool
    meta: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class MarkAllReadResult(CamelModel):
    updated: int
