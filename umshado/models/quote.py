"""Quote model: a pricing negotiation between one couple and one vendor."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, Integer, Numeric, String, Text, Uuid

from umshado.constants.quotes import QuoteStatus
from umshado.db import Base
from umshado.models.mixins import JSONType, TimestampMixin


class Quote(Base, TimestampMixin):
    """Status moves requested -> negotiating -> accepted | declined."""

    __tablename__ = "quotes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quote_ref = Column(String(64), unique=True, nullable=False, index=True)
    couple_id = Column(Uuid, nullable=False, index=True)
    vendor_id = Column(Uuid, nullable=False, index=True)
    package_id = Column(String(128), nullable=False)
    package_name = Column(String(256), nullable=True)
    pricing_mode = Column(String(32), nullable=True)
    guest_count = Column(Integer, nullable=True)
    hours = Column(Numeric(8, 2), nullable=True)
    base_from_price = Column(Numeric(12, 2), nullable=False, default=0)
    add_ons = Column(JSONType, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    vendor_final_price = Column(Numeric(12, 2), nullable=True)
    vendor_message = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default=QuoteStatus.REQUESTED.value)
