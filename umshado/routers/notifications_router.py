"""Notifications API: the caller's inbox and read-marking."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from umshado.auth.dependencies import get_current_user
from umshado.db import get_db
from umshado.exceptions import NotFoundError
from umshado.schemas.auth import AuthUser
from umshado.schemas.notification import MarkAllReadResult, NotificationRead
from umshado.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Page[NotificationRead])
def list_notifications(
    params: Params = Depends(),
    unread_only: bool = Query(False),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Page[NotificationRead]:
    """List the caller's notifications, newest first."""
    query = NotificationService(db).get_notifications_query(
        current_user.id, unread_only=unread_only
    )
    return paginate(query, params=params)


@router.post("/read-all", response_model=MarkAllReadResult)
def mark_all_notifications_read(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MarkAllReadResult:
    updated = NotificationService(db).mark_all_read(current_user.id)
    return MarkAllReadResult(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> NotificationRead:
    notification = NotificationService(db).mark_read(notification_id, current_user.id)
    if notification is None:
        raise NotFoundError("Notification not found")
    return NotificationRead.model_validate(notification)
