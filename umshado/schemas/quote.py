"""Pydantic schemas for quote creation and status changes."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from umshado.schemas.base import CamelModel


class QuoteCreateRequest(CamelModel):
    """
    Body of ``POST /quotes/create``.

    Required fields are validated by the command so a missing field is an
    input error rather than a schema error.
    """

    vendor_id: Optional[UUID] = None
    package_id: Optional[str] = None
    package_name: Optional[str] = None
    pricing_mode: Optional[str] = None
    guest_count: Optional[int] = Field(None, ge=0)
    hours: Optional[Decimal] = Field(None, ge=0)
    base_price: Optional[Decimal] = None
    add_ons: list[Any] = Field(default_factory=list)
    notes: Optional[str] = None
    quote_ref: Optional[str] = None


class QuoteCreateResult(CamelModel):
    success: bool = True
    quote_id: UUID
    conversation_id: UUID
    quote_ref: str


class QuoteStatusRequest(CamelModel):
    """Body of ``POST /quotes/status``. Either quoteId or quoteRef is required."""

    quote_id: Optional[UUID] = None
    quote_ref: Optional[str] = None
    status: Optional[str] = None
    vendor_final_price: Optional[Decimal] = Field(None, ge=0)
    vendor_message: Optional[str] = None
    conversation_id: Optional[UUID] = None


class QuoteRead(CamelModel):
    id: UUID
    quote_ref: str
    couple_id: UUID
    vendor_id: UUID
    package_id: str
    package_name: Optional[str] = None
    pricing_mode: Optional[str] = None
    guest_count: Optional[int] = None
    hours: Optional[float] = None
    base_from_price: float
    add_ons: list[Any] = Field(default_factory=list)
    notes: Optional[str] = None
    vendor_final_price: Optional[float] = None
    vendor_message: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class QuoteStatusResult(CamelModel):
    success: bool = True
    quote: QuoteRead
