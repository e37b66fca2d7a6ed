"""Quotes API: create a quote request and change a quote's status."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from umshado.auth.dependencies import get_current_user
from umshado.commands.quotes import CreateQuoteCommand, TransitionQuoteCommand
from umshado.db import get_db
from umshado.schemas.auth import AuthUser
from umshado.schemas.quote import (
    QuoteCreateRequest,
    QuoteCreateResult,
    QuoteRead,
    QuoteStatusRequest,
    QuoteStatusResult,
)

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/create", response_model=QuoteCreateResult)
def create_quote(
    body: QuoteCreateRequest,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> QuoteCreateResult:
    """Create a quote + conversation + opening message and notify both parties."""
    return CreateQuoteCommand(db).execute(current_user.id, body)


@router.post("/status", response_model=QuoteStatusResult)
def update_quote_status(
    body: QuoteStatusRequest,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> QuoteStatusResult:
    """Vendor sends a final quote; couple accepts or declines."""
    quote = TransitionQuoteCommand(db).execute(current_user.id, body)
    return QuoteStatusResult(quote=QuoteRead.model_validate(quote))
