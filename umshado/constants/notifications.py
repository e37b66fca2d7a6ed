"""Notification type tags and shared notification constants."""

from enum import StrEnum


class NotificationType(StrEnum):
    QUOTE_CREATED = "quote_created"
    QUOTE_STATUS_UPDATED = "quote_status_updated"
    MESSAGE_RECEIVED = "message_received"
    VENDOR_PUBLISHED = "vendor_published"
    INVITE_APPROVED = "invite_approved"


THREAD_META_KEY = "threadId"
SENDER_META_KEY = "senderId"


def thread_link(conversation_id) -> str:
    """Deep link to a conversation thread in the web client."""
    return f"/messages/thread/{conversation_id}"
