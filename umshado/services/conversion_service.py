"""Best-effort conversion records for accepted quotes."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from umshado.models.conversion import Conversion
from umshado.models.quote import Quote

logger = logging.getLogger(__name__)


class ConversionService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def record_conversion(
        self, quote: Quote, amount: Optional[Decimal]
    ) -> Optional[Conversion]:
        """
        Insert a conversion row for ``quote``. Returns None on failure; some
        deployments do not have the table, so errors are only logged.
        """
        try:
            conversion = Conversion(
                quote_id=quote.id,
                couple_id=quote.couple_id,
                vendor_id=quote.vendor_id,
                amount=amount or 0,
            )
            self.db.add(conversion)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to record conversion for quote %s", quote.id)
            return None
        return conversion
