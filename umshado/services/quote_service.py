"""Quote persistence: insert, lookup by id or reference, field updates."""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from umshado.constants.quotes import QuoteStatus
from umshado.models.quote import Quote


class QuoteService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_quote(self, quote_id: UUID) -> Optional[Quote]:
        return self.db.query(Quote).filter(Quote.id == quote_id).first()

    def get_quote_by_ref(self, quote_ref: str) -> Optional[Quote]:
        return self.db.query(Quote).filter(Quote.quote_ref == quote_ref).first()

    def find_quote(
        self, quote_id: Optional[UUID] = None, quote_ref: Optional[str] = None
    ) -> Optional[Quote]:
        """Look up by id when given, otherwise by reference."""
        if quote_id is not None:
            return self.get_quote(quote_id)
        if quote_ref:
            return self.get_quote_by_ref(quote_ref)
        return None

    def create_quote(self, **fields: Any) -> Quote:
        fields.setdefault("status", QuoteStatus.REQUESTED.value)
        quote = Quote(**fields)
        self.db.add(quote)
        self.db.commit()
        self.db.refresh(quote)
        return quote

    def update_quote(self, quote: Quote, changes: Dict[str, Any]) -> Quote:
        for key, value in changes.items():
            setattr(quote, key, value)
        self.db.commit()
        self.db.refresh(quote)
        return quote
