"""Vendor model: marketplace listing owned by a vendor user."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, String, Uuid

from umshado.db import Base
from umshado.models.mixins import TimestampMixin


class Vendor(Base, TimestampMixin):
    """
    Vendor listing. Older rows use ``id`` equal to the owner's user id; newer
    rows carry the owner in ``user_id``.
    """

    __tablename__ = "vendors"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=True, index=True)
    business_name = Column(String(256), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)

    @property
    def owner_id(self):
        return self.user_id or self.id
