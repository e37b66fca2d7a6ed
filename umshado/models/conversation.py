"""Conversation model: the single 1:1 thread between a couple and a vendor."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from umshado.db import Base
from umshado.models.mixins import TimestampMixin, utcnow


class Conversation(Base, TimestampMixin):
    """At most one row per (couple_id, vendor_id); the store enforces it."""

    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint(
            "couple_id", "vendor_id", name="uq_conversations_couple_vendor"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    couple_id = Column(Uuid, nullable=False, index=True)
    vendor_id = Column(Uuid, nullable=False, index=True)
    last_message_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    messages = relationship(
        "Message",
        back_populates="conversation",
        order_by="Message.created_at",
    )

    def has_participant(self, user_id) -> bool:
        return user_id in (self.couple_id, self.vendor_id)

    def other_participant(self, user_id):
        """Return the participant that is not ``user_id``."""
        return self.vendor_id if self.couple_id == user_id else self.couple_id
