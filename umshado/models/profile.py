"""Profile model: one row per authenticated user (couple, vendor or admin)."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Uuid

from umshado.db import Base
from umshado.models.mixins import TimestampMixin


class Profile(Base, TimestampMixin):
    __tablename__ = "profiles"

    # Same id as the auth provider's user id
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String(256), nullable=True)
    email = Column(String(320), nullable=True, index=True)
    role = Column(String(16), nullable=True)  # 'couple' | 'vendor' | 'admin'
