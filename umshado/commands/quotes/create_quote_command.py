"""
Command to create a quote request.

Inserts the quote, finds or creates the couple/vendor conversation, posts the
opening chat message and notifies both parties. The steps are not wrapped in
one transaction: a conversation failure after the quote insert is reported as
a partial failure carrying the quote id.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from umshado.constants.notifications import NotificationType, thread_link
from umshado.constants.quotes import PricingMode
from umshado.exceptions import InputError, PartialFailure, StoreError
from umshado.models.conversation import Conversation
from umshado.models.quote import Quote
from umshado.schemas.quote import QuoteCreateRequest, QuoteCreateResult
from umshado.services.conversation_service import ConversationService
from umshado.services.directory_service import DirectoryService
from umshado.services.message_service import MessageService
from umshado.services.notification_service import NotificationService
from umshado.services.quote_service import QuoteService
from umshado.utils.formatting import format_rand

GUEST_MODES = {PricingMode.GUEST_BASED.value, PricingMode.PER_PERSON.value}
PRICING_MODES = {m.value for m in PricingMode}


def _sizing_line(body: QuoteCreateRequest) -> Optional[str]:
    if body.pricing_mode in GUEST_MODES:
        return f"Guests: {body.guest_count if body.guest_count is not None else '-'}"
    if body.pricing_mode == PricingMode.TIME_BASED.value:
        return f"Hours: {body.hours if body.hours is not None else '-'}"
    if body.guest_count is not None:
        return f"Guests: {body.guest_count}"
    if body.hours is not None:
        return f"Hours: {body.hours}"
    return None


def build_quote_request_message(quote_ref: str, body: QuoteCreateRequest) -> str:
    """Opening chat message summarising the package, sizing, price and notes."""
    lines: List[str] = [f"Quote request {quote_ref} created", ""]
    lines.append(f"Package: {body.package_name or body.package_id}")
    sizing = _sizing_line(body)
    if sizing:
        lines.append(sizing)
    lines.append(f"Estimated Total: {format_rand(body.base_price)}")
    if body.notes:
        lines.extend(["", f"Notes: {body.notes}"])
    return "\n".join(lines)


class CreateQuoteCommand:
    """
    Create a quote for the authenticated couple and open (or reuse) the
    conversation with the vendor.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.quote_service = QuoteService(db)
        self.conversation_service = ConversationService(db)
        self.message_service = MessageService(db)
        self.directory_service = DirectoryService(db)
        self.notification_service = NotificationService(db)
        self.logger = logging.getLogger(__name__)

    def execute(self, couple_id: UUID, body: QuoteCreateRequest) -> QuoteCreateResult:
        """
        Execute the quote request.

        Args:
            couple_id: Authenticated couple making the request.
            body: Package, pricing and reference details.

        Returns:
            QuoteCreateResult: quote id, conversation id and reference.

        Raises:
            InputError: vendorId, packageId or quoteRef missing.
            StoreError: the quote insert failed; nothing else was written.
            PartialFailure: quote created but no conversation could be linked.
        """
        self._validate(body)
        quote = self._insert_quote(couple_id, body)
        conversation = self._link_conversation(quote)

        self._post_opening_message(quote, conversation, body)
        self._notify_parties(quote, conversation)

        return QuoteCreateResult(
            quote_id=quote.id,
            conversation_id=conversation.id,
            quote_ref=quote.quote_ref,
        )

    def _validate(self, body: QuoteCreateRequest) -> None:
        if not body.vendor_id or not body.package_id or not body.quote_ref:
            raise InputError("Missing required fields")
        if body.pricing_mode and body.pricing_mode not in PRICING_MODES:
            raise InputError(f"Unknown pricing mode: {body.pricing_mode}")

    def _insert_quote(self, couple_id: UUID, body: QuoteCreateRequest) -> Quote:
        try:
            return self.quote_service.create_quote(
                quote_ref=body.quote_ref,
                couple_id=couple_id,
                vendor_id=body.vendor_id,
                package_id=body.package_id,
                package_name=body.package_name,
                pricing_mode=body.pricing_mode,
                guest_count=body.guest_count,
                hours=body.hours,
                base_from_price=body.base_price or 0,
                add_ons=list(body.add_ons or []),
                notes=body.notes or None,
            )
        except IntegrityError as e:
            self.db.rollback()
            self.logger.warning(
                "Quote insert conflict for ref %s: %s", body.quote_ref, e
            )
            raise InputError(f"Quote reference {body.quote_ref} already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error("Quote insert failed for ref %s: %s", body.quote_ref, e)
            raise StoreError("Failed to create quote") from e

    def _link_conversation(self, quote: Quote) -> Conversation:
        quote_id, quote_ref = quote.id, quote.quote_ref
        try:
            conversation, created = self.conversation_service.get_or_create_for_pair(
                quote.couple_id, quote.vendor_id
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Quote %s created but conversation failed: %s", quote_ref, e
            )
            raise PartialFailure(
                "Quote created but conversation failed",
                extra={"quoteId": str(quote_id)},
            ) from e
        if created:
            self.logger.info(
                "Opened conversation %s for quote %s", conversation.id, quote_ref
            )
        return conversation

    def _post_opening_message(
        self,
        quote: Quote,
        conversation: Conversation,
        body: QuoteCreateRequest,
    ) -> None:
        text = build_quote_request_message(quote.quote_ref, body)
        try:
            self.message_service.create_message(
                conversation_id=conversation.id,
                sender_id=quote.couple_id,
                message_text=text,
                quote_ref=quote.quote_ref,
            )
            self.conversation_service.touch(conversation.id)
        except SQLAlchemyError:
            self.db.rollback()
            self.logger.exception(
                "Failed to post opening message for quote %s", quote.quote_ref
            )

    def _notify_parties(self, quote: Quote, conversation: Conversation) -> None:
        package = quote.package_name or "your selected package"
        link = thread_link(conversation.id)
        meta: Dict[str, Any] = {
            "quoteId": str(quote.id),
            "quoteRef": quote.quote_ref,
            "conversationId": str(conversation.id),
        }
        vendor_name = self.directory_service.vendor_business_name(quote.vendor_id)

        self.notification_service.dispatch(
            [quote.vendor_id],
            NotificationType.QUOTE_CREATED,
            title=f"New quote request ({quote.quote_ref})",
            body=f"A couple requested a quote for {package}.",
            link=link,
            meta=meta,
        )
        self.notification_service.dispatch(
            [quote.couple_id],
            NotificationType.QUOTE_CREATED,
            title="Quote request sent",
            body=f"Your quote request for {package} was sent to {vendor_name}.",
            link=link,
            meta=meta,
        )
