"""Message append and thread reads."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from umshado.models.message import Message


class MessageService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create_message(
        self,
        conversation_id: UUID,
        sender_id: UUID,
        message_text: str,
        quote_ref: Optional[str] = None,
    ) -> Message:
        msg = Message(
            conversation_id=conversation_id,
            sender_id=sender_id,
            message_text=message_text,
            quote_ref=quote_ref,
            read=False,
        )
        self.db.add(msg)
        self.db.commit()
        self.db.refresh(msg)
        return msg

    def get_messages_query(self, conversation_id: UUID) -> Query[Message]:
        return (
            self.db.query(Message)
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.created_at)
        )

