"""Conversation lookup, find-or-create per (couple, vendor) pair, activity bumps."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from umshado.models.conversation import Conversation

logger = logging.getLogger(__name__)


class ConversationService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_conversation(self, conversation_id: UUID) -> Optional[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(Conversation.id == conversation_id)
            .first()
        )

    def get_conversation_for_pair(
        self, couple_id: UUID, vendor_id: UUID
    ) -> Optional[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(
                Conversation.couple_id == couple_id,
                Conversation.vendor_id == vendor_id,
            )
            .first()
        )

    def get_or_create_for_pair(
        self, couple_id: UUID, vendor_id: UUID
    ) -> Tuple[Conversation, bool]:
        """
        Return (conversation, created) for the pair.

        Two concurrent callers may both miss the lookup; the loser's insert
        hits the unique constraint and re-reads the winner's row. Any other
        store error propagates.
        """
        conversation = self.get_conversation_for_pair(couple_id, vendor_id)
        if conversation is not None:
            return conversation, False

        conversation = Conversation(couple_id=couple_id, vendor_id=vendor_id)
        self.db.add(conversation)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(
                "Conversation for couple=%s vendor=%s created concurrently; re-reading",
                couple_id,
                vendor_id,
            )
            existing = self.get_conversation_for_pair(couple_id, vendor_id)
            if existing is None:
                raise
            return existing, False
        self.db.refresh(conversation)
        return conversation, True

    def touch(self, conversation_id: UUID, at: Optional[datetime] = None) -> None:
        """Set last_message_at; commits."""
        self.db.query(Conversation).filter(Conversation.id == conversation_id).update(
            {Conversation.last_message_at: at or datetime.now(timezone.utc)},
            synchronize_session="fetch",
        )
        self.db.commit()

    def get_conversations_query(self, user_id: UUID) -> Query[Conversation]:
        """Conversations the user participates in, most recent activity first."""
        return (
            self.db.query(Conversation)
            .filter(
                or_(
                    Conversation.couple_id == user_id,
                    Conversation.vendor_id == user_id,
                )
            )
            .order_by(Conversation.last_message_at.desc())
        )

    def get_conversations(
        self, user_id: UUID, skip: int = 0, limit: int = 100
    ) -> List[Conversation]:
        return self.get_conversations_query(user_id).offset(skip).limit(limit).all()
