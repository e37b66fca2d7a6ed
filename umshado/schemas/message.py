"""Pydantic schemas for conversations and chat messages."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from umshado.schemas.base import CamelModel


class MessageSendRequest(CamelModel):
    conversation_id: Optional[UUID] = None
    message_text: Optional[str] = None


class MessageSendResult(CamelModel):
    success: bool = True
    message_id: UUID
    created_at: datetime


class MessageRead(CamelModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    message_text: str
    quote_ref: Optional[str] = None
    read: bool
    created_at: datetime


class ConversationRead(CamelModel):
    id: UUID
    couple_id: UUID
    vendor_id: UUID
    last_message_at: datetime
    created_at: datetime
