"""
Invite gate API.

Public endpoints to validate and redeem invite tokens, plus admin endpoints
to review beta access requests.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from umshado.adapters.auth_provider import AuthProviderClient
from umshado.auth.dependencies import get_auth_client, require_admin
from umshado.commands.invites import InviteTokenCommand, ReviewBetaRequestCommand
from umshado.db import get_db
from umshado.schemas.auth import AuthUser
from umshado.schemas.beta_request import (
    BetaRequestAction,
    BetaRequestRead,
    InviteRedeemRequest,
)

router = APIRouter(tags=["invites"])


@router.get("/invites/validate")
def validate_invite(
    token: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> dict:
    """Check an invite token; returns the invitee's details when usable."""
    invite = InviteTokenCommand(db).validate(token)
    return {"valid": True, "invite": invite.model_dump()}


@router.post("/invites/validate")
def redeem_invite(
    body: InviteRedeemRequest,
    db: Session = Depends(get_db),
) -> dict:
    """Mark an invite token as redeemed after sign-up."""
    InviteTokenCommand(db).redeem(body.token)
    return {"success": True}


@router.get("/admin/beta-requests")
def list_beta_requests(
    _admin: AuthUser = Depends(require_admin),
    auth_client: AuthProviderClient = Depends(get_auth_client),
    db: Session = Depends(get_db),
) -> dict:
    rows = ReviewBetaRequestCommand(db, auth_client).list_requests()
    return {"requests": [r.model_dump(mode="json") for r in rows]}


@router.post("/admin/beta-requests")
def review_beta_request(
    body: BetaRequestAction,
    _admin: AuthUser = Depends(require_admin),
    auth_client: AuthProviderClient = Depends(get_auth_client),
    db: Session = Depends(get_db),
) -> dict:
    """Approve, revoke, reset to pending or mark redeemed."""
    updated = ReviewBetaRequestCommand(db, auth_client).execute(body.action, body.id)
    return {
        "success": True,
        "updated": BetaRequestRead.model_validate(updated).model_dump(mode="json"),
    }
