"""Command to publish a vendor profile to the marketplace."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from umshado.constants.notifications import NotificationType
from umshado.exceptions import AuthorizationError, InputError, NotFoundError, StoreError
from umshado.models.vendor import Vendor
from umshado.services.directory_service import DirectoryService
from umshado.services.notification_service import NotificationService

VENDOR_DASHBOARD_LINK = "/vendor/dashboard"


class PublishVendorCommand:
    """Set ``is_published`` on the caller's vendor profile and notify them."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.directory_service = DirectoryService(db)
        self.notification_service = NotificationService(db)
        self.logger = logging.getLogger(__name__)

    def execute(self, actor_id: UUID, vendor_id: Optional[UUID]) -> Vendor:
        if vendor_id is None:
            raise InputError("Missing vendorId")
        vendor = self.directory_service.get_vendor(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor not found")
        if actor_id not in (vendor.owner_id, vendor.id):
            raise AuthorizationError("Not your vendor profile")

        try:
            vendor = self.directory_service.publish_vendor(vendor)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error("Publishing vendor %s failed: %s", vendor_id, e)
            raise StoreError("Failed to publish") from e

        name = vendor.business_name or "Your profile"
        self.notification_service.dispatch(
            [actor_id],
            NotificationType.VENDOR_PUBLISHED,
            title="Profile published! 🎉",
            body=f"{name} is now live on the marketplace.",
            link=VENDOR_DASHBOARD_LINK,
            meta={"vendorId": str(vendor.id)},
        )
        return vendor
