"""Pydantic schemas for vendor actions."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from umshado.schemas.base import CamelModel


class VendorPublishRequest(CamelModel):
    vendor_id: Optional[UUID] = None
