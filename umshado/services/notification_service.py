"""
Notification dispatch, message-notification throttling and the recipient inbox.

Dispatch is a best-effort side channel: it never raises to the caller, so a
failed notification can never block the quote, message or publish that
triggered it. The throttle check fails open for the same reason.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Query, Session

from umshado.constants.notifications import THREAD_META_KEY, NotificationType
from umshado.models.notification import Notification

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 60


def _unique_recipients(recipient_ids: Iterable[Any]) -> List[UUID]:
    """Drop empty, malformed and duplicate entries, keeping first-seen order."""
    seen = set()
    ids = []
    for rid in recipient_ids:
        if not rid:
            continue
        try:
            uid = rid if isinstance(rid, UUID) else UUID(str(rid))
        except (TypeError, ValueError, AttributeError):
            logger.warning("Skipping malformed notification recipient %r", rid)
            continue
        if uid in seen:
            continue
        seen.add(uid)
        ids.append(uid)
    return ids


class NotificationService:
    """Append-only writes to ``notifications`` plus recipient read-marking."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def dispatch(
        self,
        recipient_ids: Iterable[Any],
        notification_type: str,
        title: str,
        body: str,
        link: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Insert one notification per distinct recipient.

        Returns the number of rows written; 0 for an empty recipient set or on
        any failure. Never raises.
        """
        try:
            ids = _unique_recipients(recipient_ids)
        except TypeError as e:
            logger.warning(
                "Skipping %s notification with unreadable recipient list: %s",
                notification_type,
                e,
            )
            return 0
        if not ids:
            return 0

        try:
            rows = [
                Notification(
                    user_id=uid,
                    type=str(notification_type),
                    title=title,
                    body=body,
                    link=link,
                    is_read=False,
                    meta=dict(meta or {}),
                )
                for uid in ids
            ]
            self.db.add_all(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(
                "Failed to insert %s notification(s) of type %s",
                len(ids),
                notification_type,
            )
            return 0
        logger.debug(
            "Dispatched %s notification(s) of type %s", len(rows), notification_type
        )
        return len(rows)

    def should_throttle(
        self,
        receiver_id: UUID,
        thread_id: Any,
        cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        True when ``receiver_id`` already got a message notification for
        ``thread_id`` within the last ``cooldown_seconds``.

        Fails open: a lookup error returns False.
        """
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(seconds=cooldown_seconds)
        try:
            recent = self._recent_message_notifications(receiver_id, since)
            if recent.first() is None:
                return False
            thread_key = str(thread_id)
            return any(
                (n.meta or {}).get(THREAD_META_KEY) == thread_key for n in recent.all()
            )
        except Exception:
            self.db.rollback()
            logger.exception(
                "Throttle check failed for receiver=%s thread=%s; not throttling",
                receiver_id,
                thread_id,
            )
            return False

    def _recent_message_notifications(
        self, receiver_id: UUID, since: datetime
    ) -> Query[Notification]:
        return (
            self.db.query(Notification)
            .filter(
                Notification.user_id == receiver_id,
                Notification.type == NotificationType.MESSAGE_RECEIVED.value,
                Notification.created_at >= since,
            )
            .order_by(Notification.created_at.desc())
        )

    def get_notification(self, notification_id: UUID) -> Optional[Notification]:
        return (
            self.db.query(Notification)
            .filter(Notification.id == notification_id)
            .first()
        )

    def get_notifications_query(
        self, user_id: UUID, unread_only: bool = False
    ) -> Query[Notification]:
        """Query for a user's notifications, newest first (for pagination)."""
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.order_by(Notification.created_at.desc())

    def get_notifications(
        self, user_id: UUID, skip: int = 0, limit: int = 100
    ) -> List[Notification]:
        return self.get_notifications_query(user_id).offset(skip).limit(limit).all()

    def mark_read(self, notification_id: UUID, user_id: UUID) -> Optional[Notification]:
        """Mark one of the user's notifications read. None if not theirs or missing."""
        notification = self.get_notification(notification_id)
        if notification is None or notification.user_id != user_id:
            return None
        if not notification.is_read:
            notification.is_read = True
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, user_id: UUID) -> int:
        result = self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        self.db.commit()
        return result.rowcount or 0
