"""
Command to send a chat message in a couple/vendor conversation.

Appends the message, bumps the conversation and notifies the other
participant unless they were already notified about this thread within the
cooldown window.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from umshado.config import Settings, get_settings
from umshado.constants.notifications import (
    SENDER_META_KEY,
    THREAD_META_KEY,
    NotificationType,
    thread_link,
)
from umshado.exceptions import AuthorizationError, InputError, NotFoundError, StoreError
from umshado.models.conversation import Conversation
from umshado.models.message import Message
from umshado.services.conversation_service import ConversationService
from umshado.services.directory_service import DirectoryService
from umshado.services.message_service import MessageService
from umshado.services.notification_service import NotificationService
from umshado.utils.formatting import truncate_preview


class SendMessageCommand:
    """Append a message from one participant and notify the other."""

    def __init__(self, db: Session, settings: Optional[Settings] = None) -> None:
        self.db = db
        self.settings = settings or get_settings()
        self.conversation_service = ConversationService(db)
        self.message_service = MessageService(db)
        self.directory_service = DirectoryService(db)
        self.notification_service = NotificationService(db)
        self.logger = logging.getLogger(__name__)

    def execute(
        self,
        sender_id: UUID,
        conversation_id: Optional[UUID],
        message_text: Optional[str],
    ) -> Message:
        """
        Execute the send.

        Args:
            sender_id: Authenticated caller.
            conversation_id: Target conversation.
            message_text: Raw text; trimmed before storing.

        Returns:
            Message: the stored message.

        Raises:
            InputError: missing conversation or empty text (nothing written).
            NotFoundError: conversation does not exist.
            AuthorizationError: sender is not one of the two participants.
            StoreError: the message insert failed.
        """
        text = (message_text or "").strip()
        if conversation_id is None or not text:
            raise InputError("Missing conversationId or messageText")

        conversation = self.conversation_service.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        if not conversation.has_participant(sender_id):
            raise AuthorizationError("Not a participant")

        message = self._append(conversation, sender_id, text)
        self._bump(conversation)

        receiver_id = conversation.other_participant(sender_id)
        if self.notification_service.should_throttle(
            receiver_id,
            conversation.id,
            self.settings.message_notification_cooldown_seconds,
        ):
            self.logger.debug(
                "Message notification to %s for thread %s throttled",
                receiver_id,
                conversation.id,
            )
            return message

        sender_name = self.directory_service.display_name(sender_id)
        self.notification_service.dispatch(
            [receiver_id],
            NotificationType.MESSAGE_RECEIVED,
            title=f"New message from {sender_name}",
            body=truncate_preview(text, self.settings.message_preview_length),
            link=thread_link(conversation.id),
            meta={
                THREAD_META_KEY: str(conversation.id),
                SENDER_META_KEY: str(sender_id),
            },
        )
        return message

    def _append(
        self, conversation: Conversation, sender_id: UUID, text: str
    ) -> Message:
        try:
            return self.message_service.create_message(
                conversation_id=conversation.id,
                sender_id=sender_id,
                message_text=text,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Message insert failed for conversation %s: %s", conversation.id, e
            )
            raise StoreError("Failed to send message") from e

    def _bump(self, conversation: Conversation) -> None:
        try:
            self.conversation_service.touch(conversation.id)
        except SQLAlchemyError:
            self.db.rollback()
            self.logger.exception(
                "Failed to update last_message_at for conversation %s", conversation.id
            )
