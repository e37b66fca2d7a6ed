"""Tests for invite validation, admin review, vendor publish and health."""

from unittest.mock import MagicMock

import pytest

from umshado.auth.dependencies import get_auth_client
from umshado.config import Settings, get_settings


@pytest.fixture
def auth_client_mock(client):
    mock = MagicMock()
    mock.find_user_id_by_email.return_value = None
    client.app.dependency_overrides[get_auth_client] = lambda: mock
    return mock


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_validate_invite(client, setup_approved_request):
    r = client.get(
        "/invites/validate", params={"token": str(setup_approved_request.invite_token)}
    )
    assert r.status_code == 200
    data = r.json()
    assert data["valid"] is True
    assert data["invite"]["email"] == setup_approved_request.email


def test_validate_invite_missing_token(client):
    r = client.get("/invites/validate")
    assert r.status_code == 400
    assert r.json() == {"error": "No token provided", "valid": False}


def test_validate_redeemed_invite(client, setup_redeemed_request):
    r = client.get(
        "/invites/validate", params={"token": str(setup_redeemed_request.invite_token)}
    )
    assert r.status_code == 410
    assert r.json()["valid"] is False


def test_redeem_invite(client, setup_approved_request):
    token = str(setup_approved_request.invite_token)
    r = client.post("/invites/validate", json={"token": token})
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = client.get("/invites/validate", params={"token": token})
    assert r.status_code == 410


def test_admin_requires_admin_email(
    client, login_as, auth_client_mock, setup_couple
):
    login_as(setup_couple.id, email="someone@example.com")
    r = client.get("/admin/beta-requests")
    assert r.status_code == 403
    assert r.json() == {"error": "Not authorized"}


def test_admin_list_and_approve(
    client, login_as, auth_client_mock, setup_couple, setup_pending_request
):
    login_as(setup_couple.id, email="Admin@umshado.test")

    r = client.get("/admin/beta-requests")
    assert r.status_code == 200
    rows = r.json()["requests"]
    assert rows[0]["id"] == str(setup_pending_request.id)
    assert rows[0]["registered"] is False

    r = client.post(
        "/admin/beta-requests",
        json={"action": "approve", "id": str(setup_pending_request.id)},
    )
    assert r.status_code == 200
    updated = r.json()["updated"]
    assert updated["status"] == "approved"
    assert updated["invite_token"]


def test_admin_invalid_action(
    client, login_as, auth_client_mock, setup_couple, setup_pending_request
):
    login_as(setup_couple.id, email="admin@umshado.test")
    r = client.post(
        "/admin/beta-requests",
        json={"action": "delete", "id": str(setup_pending_request.id)},
    )
    assert r.status_code == 400


def test_publish_vendor(client, login_as, setup_vendor):
    login_as(setup_vendor.id)
    r = client.post("/vendor/publish", json={"vendorId": str(setup_vendor.id)})
    assert r.status_code == 200
    assert r.json() == {"success": True}


def test_publish_vendor_not_owner(client, login_as, setup_vendor, setup_couple):
    login_as(setup_couple.id)
    r = client.post("/vendor/publish", json={"vendorId": str(setup_vendor.id)})
    assert r.status_code == 403


def test_missing_auth_provider_settings(client, login_as, setup_couple):
    settings = Settings(
        supabase_url=None,
        supabase_anon_key=None,
        admin_emails="admin@umshado.test",
    )
    client.app.dependency_overrides[get_settings] = lambda: settings
    login_as(setup_couple.id, email="admin@umshado.test")

    r = client.get("/admin/beta-requests")
    assert r.status_code == 500
    assert r.json() == {"error": "Server misconfigured"}
