"""Tests for notifications router."""

import uuid

from umshado.constants.notifications import NotificationType
from umshado.services.notification_service import NotificationService


def _seed(db, user_id, count=2):
    svc = NotificationService(db)
    for i in range(count):
        svc.dispatch([user_id], NotificationType.QUOTE_CREATED, f"title {i}", "body")


def test_list_notifications(client, db, login_as, setup_couple):
    _seed(db, setup_couple.id)
    _seed(db, uuid.uuid4(), count=1)
    login_as(setup_couple.id)

    r = client.get("/notifications")
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 2
    assert all(n["userId"] == str(setup_couple.id) for n in data["items"])
    assert all(n["isRead"] is False for n in data["items"])


def test_mark_read_and_unread_filter(client, db, login_as, setup_couple):
    _seed(db, setup_couple.id)
    login_as(setup_couple.id)
    first_id = client.get("/notifications").json()["items"][0]["id"]

    r = client.post(f"/notifications/{first_id}/read")
    assert r.status_code == 200
    assert r.json()["isRead"] is True

    r = client.get("/notifications", params={"unread_only": True})
    assert r.json()["total"] == 1


def test_mark_read_other_users_notification(client, db, login_as, setup_couple):
    other = uuid.uuid4()
    _seed(db, other, count=1)
    notification = NotificationService(db).get_notifications(other)[0]
    login_as(setup_couple.id)

    r = client.post(f"/notifications/{notification.id}/read")
    assert r.status_code == 404


def test_mark_all_read(client, db, login_as, setup_couple):
    _seed(db, setup_couple.id, count=3)
    login_as(setup_couple.id)

    r = client.post("/notifications/read-all")
    assert r.status_code == 200
    assert r.json() == {"updated": 3}
