"""Read-only lookups of profiles and vendors for display text."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from umshado.models.profile import Profile
from umshado.models.vendor import Vendor

logger = logging.getLogger(__name__)

FALLBACK_SENDER_NAME = "Someone"
FALLBACK_VENDOR_NAME = "a vendor"


class DirectoryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_profile(self, user_id: UUID) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.id == user_id).first()

    def get_vendor(self, vendor_id: UUID) -> Optional[Vendor]:
        return self.db.query(Vendor).filter(Vendor.id == vendor_id).first()

    def vendor_business_name(
        self, vendor_id: UUID, default: str = FALLBACK_VENDOR_NAME
    ) -> str:
        """Business name for notification text, or ``default`` on lookup errors."""
        try:
            vendor = self.get_vendor(vendor_id)
        except Exception:
            self.db.rollback()
            logger.exception("Vendor lookup failed for %s", vendor_id)
            return default
        return (vendor.business_name if vendor else None) or default

    def display_name(self, user_id: UUID) -> str:
        """Profile full name, else vendor business name, else ``Someone``."""
        try:
            profile = self.get_profile(user_id)
            if profile is not None and profile.full_name:
                return profile.full_name
            vendor = self.get_vendor(user_id)
            if vendor is not None and vendor.business_name:
                return vendor.business_name
        except Exception:
            self.db.rollback()
            logger.exception("Display name lookup failed for %s", user_id)
        return FALLBACK_SENDER_NAME

    def publish_vendor(self, vendor: Vendor) -> Vendor:
        vendor.is_published = True
        self.db.commit()
        self.db.refresh(vendor)
        return vendor
