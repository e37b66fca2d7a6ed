"""Tests for beta request review and invite token commands."""

import uuid
from unittest.mock import MagicMock

import pytest
import requests

from umshado.commands.invites import InviteTokenCommand, ReviewBetaRequestCommand
from umshado.exceptions import (
    AuthorizationError,
    GoneError,
    InputError,
    NotFoundError,
)
from umshado.models.notification import Notification


@pytest.fixture
def auth_client():
    client = MagicMock()
    client.find_user_id_by_email.return_value = None
    return client


def test_approve_issues_token_and_notifies_registered_user(
    db, auth_client, setup_pending_request
):
    user_id = uuid.uuid4()
    auth_client.find_user_id_by_email.return_value = str(user_id)

    updated = ReviewBetaRequestCommand(db, auth_client).execute(
        "approve", setup_pending_request.id
    )

    assert updated.status == "approved"
    assert updated.invite_token is not None
    notification = db.query(Notification).one()
    assert notification.user_id == user_id
    assert notification.type == "invite_approved"
    assert notification.meta == {"betaRequestId": str(setup_pending_request.id)}


def test_approve_without_account_skips_notification(
    db, auth_client, setup_pending_request
):
    ReviewBetaRequestCommand(db, auth_client).execute(
        "approve", setup_pending_request.id
    )
    assert db.query(Notification).count() == 0


def test_approve_survives_lookup_failure(db, auth_client, setup_pending_request):
    auth_client.find_user_id_by_email.side_effect = requests.ConnectionError("down")
    updated = ReviewBetaRequestCommand(db, auth_client).execute(
        "approve", setup_pending_request.id
    )
    assert updated.status == "approved"


def test_reapprove_keeps_token(db, auth_client, setup_approved_request):
    token = setup_approved_request.invite_token
    updated = ReviewBetaRequestCommand(db, auth_client).execute(
        "approve", setup_approved_request.id
    )
    assert updated.invite_token == token


def test_revoke(db, auth_client, setup_approved_request):
    updated = ReviewBetaRequestCommand(db, auth_client).execute(
        "revoke", setup_approved_request.id
    )
    assert updated.status == "revoked"


@pytest.mark.parametrize("action", [None, "", "delete"])
def test_invalid_action(db, auth_client, setup_pending_request, action):
    with pytest.raises(InputError):
        ReviewBetaRequestCommand(db, auth_client).execute(
            action, setup_pending_request.id
        )


def test_unknown_request(db, auth_client):
    with pytest.raises(NotFoundError):
        ReviewBetaRequestCommand(db, auth_client).execute("approve", uuid.uuid4())


def test_list_requests_flags_registered(
    db, auth_client, setup_pending_request, setup_approved_request
):
    registered_email = setup_approved_request.email.lower()
    auth_client.find_user_id_by_email.side_effect = lambda email: (
        "some-id" if email == registered_email else None
    )
    rows = ReviewBetaRequestCommand(db, auth_client).list_requests()

    flags = {row.email: row.registered for row in rows}
    assert flags[setup_approved_request.email] is True
    assert flags[setup_pending_request.email] is False


def test_validate_approved_invite(db, setup_approved_request):
    invite = InviteTokenCommand(db).validate(str(setup_approved_request.invite_token))
    assert invite.email == setup_approved_request.email
    assert invite.role == "couple"


def test_validate_redeemed_invite_is_gone(db, setup_redeemed_request):
    with pytest.raises(GoneError) as exc_info:
        InviteTokenCommand(db).validate(str(setup_redeemed_request.invite_token))
    assert exc_info.value.extra["valid"] is False


def test_validate_unapproved_invite(db, setup_pending_request):
    setup_pending_request.invite_token = uuid.uuid4()
    db.commit()
    with pytest.raises(AuthorizationError):
        InviteTokenCommand(db).validate(str(setup_pending_request.invite_token))


@pytest.mark.parametrize("token", [None, "", "not-a-uuid"])
def test_validate_bad_token(db, token):
    with pytest.raises(InputError):
        InviteTokenCommand(db).validate(token)


def test_validate_unknown_token(db):
    with pytest.raises(NotFoundError):
        InviteTokenCommand(db).validate(str(uuid.uuid4()))


def test_redeem(db, setup_approved_request):
    redeemed = InviteTokenCommand(db).redeem(str(setup_approved_request.invite_token))
    assert redeemed.status == "redeemed"
    with pytest.raises(GoneError):
        InviteTokenCommand(db).validate(str(setup_approved_request.invite_token))
