"""Vendor API: publish a vendor profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from umshado.auth.dependencies import get_current_user
from umshado.commands.vendors import PublishVendorCommand
from umshado.db import get_db
from umshado.schemas.auth import AuthUser
from umshado.schemas.vendor import VendorPublishRequest

router = APIRouter(prefix="/vendor", tags=["vendors"])


@router.post("/publish")
def publish_vendor(
    body: VendorPublishRequest,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    PublishVendorCommand(db).execute(current_user.id, body.vendor_id)
    return {"success": True}
