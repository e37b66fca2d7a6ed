"""
Command to move a quote along requested -> negotiating -> accepted | declined.

The vendor sends (or re-sends) a final price by moving the quote into
negotiating; the couple accepts or declines. Each real change posts a chat
message and notifies the other party. Repeating a request that changes
nothing is a no-op, so client retries do not duplicate messages or
notifications.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from umshado.constants.notifications import NotificationType, thread_link
from umshado.constants.quotes import (
    STATUS_ALIASES,
    ParticipantRole,
    QuoteStatus,
)
from umshado.exceptions import (
    AuthorizationError,
    InputError,
    InvalidTransition,
    NotFoundError,
    StoreError,
)
from umshado.models.conversation import Conversation
from umshado.models.quote import Quote
from umshado.schemas.quote import QuoteStatusRequest
from umshado.services.conversation_service import ConversationService
from umshado.services.conversion_service import ConversionService
from umshado.services.directory_service import DirectoryService
from umshado.services.message_service import MessageService
from umshado.services.notification_service import NotificationService
from umshado.services.quote_service import QuoteService
from umshado.utils.formatting import format_rand

# Statuses each role may request
ROLE_TARGETS = {
    ParticipantRole.VENDOR: frozenset({QuoteStatus.NEGOTIATING}),
    ParticipantRole.COUPLE: frozenset({QuoteStatus.ACCEPTED, QuoteStatus.DECLINED}),
}

_OPEN_STATUSES = frozenset({QuoteStatus.REQUESTED, QuoteStatus.NEGOTIATING})

# Statuses a quote may be in when moving to the key status
ALLOWED_SOURCES = {
    QuoteStatus.NEGOTIATING: _OPEN_STATUSES,
    QuoteStatus.ACCEPTED: _OPEN_STATUSES,
    QuoteStatus.DECLINED: _OPEN_STATUSES,
}


@dataclass(frozen=True)
class TransitionNotice:
    """Notification sent to the other party for a (role, status) pair."""

    title: str
    body: str


TRANSITION_NOTICES = {
    (ParticipantRole.VENDOR, QuoteStatus.NEGOTIATING): TransitionNotice(
        title="Final quote received ({ref})",
        body="{vendor} sent a final quote of {price} for {package}.",
    ),
    (ParticipantRole.COUPLE, QuoteStatus.ACCEPTED): TransitionNotice(
        title="Quote accepted ({ref})",
        body="The couple accepted your quote for {package}.",
    ),
    (ParticipantRole.COUPLE, QuoteStatus.DECLINED): TransitionNotice(
        title="Quote declined ({ref})",
        body="The couple declined your quote for {package}.",
    ),
}


def normalize_status(raw: Optional[str]) -> QuoteStatus:
    """Map client input (including the legacy ``sent``) to a target status."""
    value = (raw or "").strip().lower()
    if value in STATUS_ALIASES:
        return STATUS_ALIASES[value]
    try:
        status = QuoteStatus(value)
    except ValueError as e:
        raise InputError(f"Invalid status: {raw!r}") from e
    if status not in ALLOWED_SOURCES:
        raise InputError(f"Invalid status: {raw!r}")
    return status


class TransitionQuoteCommand:
    """Apply a status change requested by one of the quote's two parties."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.quote_service = QuoteService(db)
        self.conversation_service = ConversationService(db)
        self.message_service = MessageService(db)
        self.conversion_service = ConversionService(db)
        self.directory_service = DirectoryService(db)
        self.notification_service = NotificationService(db)
        self.logger = logging.getLogger(__name__)

    def execute(self, actor_id: UUID, body: QuoteStatusRequest) -> Quote:
        """
        Execute the status change.

        Args:
            actor_id: Authenticated caller; must be the quote's vendor or couple.
            body: Quote identifier, target status and optional vendor fields.

        Returns:
            Quote: the quote after the change (unchanged for a no-op repeat).

        Raises:
            InputError: missing identifier, bad status or missing final price.
            NotFoundError: no quote matches.
            AuthorizationError: caller is not a party or may not set that status.
            InvalidTransition: the quote's current status does not allow it.
            StoreError: the quote update failed.
        """
        if body.quote_id is None and not body.quote_ref:
            raise InputError("Missing quoteId or quoteRef")
        target = normalize_status(body.status)

        quote = self.quote_service.find_quote(body.quote_id, body.quote_ref)
        if quote is None:
            raise NotFoundError("Quote not found")

        role = self._role_of(quote, actor_id)
        if target not in ROLE_TARGETS[role]:
            raise AuthorizationError(
                f"A {role.value} cannot set status {target.value}"
            )

        changes = self._build_changes(quote, role, target, body)
        if not changes:
            self.logger.info(
                "Quote %s already %s; nothing to change", quote.quote_ref, target.value
            )
            return quote

        current = QuoteStatus(quote.status)
        if current not in ALLOWED_SOURCES[target]:
            raise InvalidTransition(
                f"Quote is {current.value} and cannot become {target.value}"
            )

        prior_final_price = quote.vendor_final_price
        quote = self._apply(quote, changes)

        conversation = self._resolve_conversation(quote, body.conversation_id)
        self._post_chat_message(quote, conversation, role, target, actor_id)
        if target == QuoteStatus.ACCEPTED:
            self.conversion_service.record_conversion(
                quote, quote.vendor_final_price or prior_final_price or Decimal(0)
            )
        self._notify_other_party(quote, conversation, role, target)
        return quote

    def _role_of(self, quote: Quote, actor_id: UUID) -> ParticipantRole:
        if actor_id == quote.vendor_id:
            return ParticipantRole.VENDOR
        if actor_id == quote.couple_id:
            return ParticipantRole.COUPLE
        raise AuthorizationError("Not a party to this quote")

    def _build_changes(
        self,
        quote: Quote,
        role: ParticipantRole,
        target: QuoteStatus,
        body: QuoteStatusRequest,
    ) -> Dict[str, Any]:
        """Fields that would change; vendor fields from the couple are dropped."""
        changes: Dict[str, Any] = {}
        if quote.status != target.value:
            changes["status"] = target.value
        if role != ParticipantRole.VENDOR:
            return changes

        if body.vendor_final_price is not None and (
            quote.vendor_final_price is None
            or Decimal(quote.vendor_final_price) != body.vendor_final_price
        ):
            changes["vendor_final_price"] = body.vendor_final_price
        message = (body.vendor_message or "").strip()
        if message and message != (quote.vendor_message or ""):
            changes["vendor_message"] = message

        if (
            target == QuoteStatus.NEGOTIATING
            and body.vendor_final_price is None
            and quote.vendor_final_price is None
        ):
            raise InputError("vendorFinalPrice is required to send a final quote")
        return changes

    def _apply(self, quote: Quote, changes: Dict[str, Any]) -> Quote:
        try:
            return self.quote_service.update_quote(quote, changes)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error("Quote %s update failed: %s", quote.id, e)
            raise StoreError("Failed to update quote") from e

    def _resolve_conversation(
        self, quote: Quote, conversation_id: Optional[UUID]
    ) -> Optional[Conversation]:
        """The supplied conversation if it belongs to the pair, else the pair's."""
        try:
            if conversation_id is not None:
                conversation = self.conversation_service.get_conversation(
                    conversation_id
                )
                if (
                    conversation is not None
                    and conversation.couple_id == quote.couple_id
                    and conversation.vendor_id == quote.vendor_id
                ):
                    return conversation
            return self.conversation_service.get_conversation_for_pair(
                quote.couple_id, quote.vendor_id
            )
        except SQLAlchemyError:
            self.db.rollback()
            self.logger.exception("Conversation lookup failed for quote %s", quote.id)
            return None

    def _chat_text(
        self, quote: Quote, role: ParticipantRole, target: QuoteStatus
    ) -> Optional[str]:
        if role == ParticipantRole.VENDOR and target == QuoteStatus.NEGOTIATING:
            text = (
                f"Final quote for {quote.quote_ref}: "
                f"{format_rand(quote.vendor_final_price)}"
            )
            if quote.vendor_message:
                text += f"\n\n{quote.vendor_message}"
            return text
        if role == ParticipantRole.COUPLE and target == QuoteStatus.ACCEPTED:
            return f"Quote {quote.quote_ref} accepted."
        if role == ParticipantRole.COUPLE and target == QuoteStatus.DECLINED:
            return f"Quote {quote.quote_ref} declined."
        return None

    def _post_chat_message(
        self,
        quote: Quote,
        conversation: Optional[Conversation],
        role: ParticipantRole,
        target: QuoteStatus,
        actor_id: UUID,
    ) -> None:
        text = self._chat_text(quote, role, target)
        if conversation is None or text is None:
            return
        try:
            self.message_service.create_message(
                conversation_id=conversation.id,
                sender_id=actor_id,
                message_text=text,
                quote_ref=quote.quote_ref,
            )
            self.conversation_service.touch(conversation.id)
        except SQLAlchemyError:
            self.db.rollback()
            self.logger.exception(
                "Failed to post status message for quote %s", quote.quote_ref
            )

    def _notify_other_party(
        self,
        quote: Quote,
        conversation: Optional[Conversation],
        role: ParticipantRole,
        target: QuoteStatus,
    ) -> None:
        notice = TRANSITION_NOTICES.get((role, target))
        if notice is None:
            return
        recipient = (
            quote.couple_id if role == ParticipantRole.VENDOR else quote.vendor_id
        )
        fields = {
            "ref": quote.quote_ref,
            "package": quote.package_name or "your package",
            "price": format_rand(quote.vendor_final_price),
            "vendor": (
                self.directory_service.vendor_business_name(
                    quote.vendor_id, "Your vendor"
                )
                if role == ParticipantRole.VENDOR
                else ""
            ),
        }
        meta: Dict[str, Any] = {
            "quoteId": str(quote.id),
            "quoteRef": quote.quote_ref,
            "status": target.value,
        }
        if conversation is not None:
            meta["conversationId"] = str(conversation.id)
        self.notification_service.dispatch(
            [recipient],
            NotificationType.QUOTE_STATUS_UPDATED,
            title=notice.title.format(**fields),
            body=notice.body.format(**fields),
            link=thread_link(conversation.id) if conversation is not None else None,
            meta=meta,
        )
