"""
Notification model: one user-facing alert per recipient per dispatch.

Rows are only ever inserted by the dispatcher; the recipient may flip
``is_read``.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, Uuid

from umshado.db import Base
from umshado.models.mixins import JSONType, utcnow


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index(
            "ix_notifications_user_type_created", "user_id", "type", "created_at"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False)
    type = Column(String(64), nullable=False)
    title = Column(String(256), nullable=False)
    body = Column(Text, nullable=False, default="")
    link = Column(String(512), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    meta = Column(JSONType, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
