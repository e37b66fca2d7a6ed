"""Conversion model: revenue record written when a couple accepts a quote."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Numeric, Uuid

from umshado.db import Base
from umshado.models.mixins import utcnow


class Conversion(Base):
    __tablename__ = "conversions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quote_id = Column(Uuid, nullable=False, index=True)
    couple_id = Column(Uuid, nullable=False)
    vendor_id = Column(Uuid, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
