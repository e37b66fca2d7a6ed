"""Tests for ConversationService."""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from umshado.models.conversation import Conversation
from umshado.services.conversation_service import ConversationService


def test_get_or_create_creates_once(db):
    couple, vendor = uuid.uuid4(), uuid.uuid4()
    svc = ConversationService(db)

    first, created = svc.get_or_create_for_pair(couple, vendor)
    second, created_again = svc.get_or_create_for_pair(couple, vendor)

    assert created is True
    assert created_again is False
    assert first.id == second.id
    assert db.query(Conversation).count() == 1


def test_get_or_create_recovers_from_concurrent_insert(db, setup_conversation):
    """A lookup miss followed by a unique violation re-reads the existing row."""
    svc = ConversationService(db)
    real_lookup = ConversationService.get_conversation_for_pair
    calls = {"n": 0}

    def racy_lookup(self, couple_id, vendor_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_lookup(self, couple_id, vendor_id)

    with patch.object(
        ConversationService, "get_conversation_for_pair", racy_lookup
    ):
        conversation, created = svc.get_or_create_for_pair(
            setup_conversation.couple_id, setup_conversation.vendor_id
        )

    assert created is False
    assert conversation.id == setup_conversation.id
    assert db.query(Conversation).count() == 1


def test_touch_sets_last_message_at(db, setup_conversation):
    svc = ConversationService(db)
    at = datetime.now(timezone.utc) + timedelta(minutes=5)
    svc.touch(setup_conversation.id, at=at)
    db.expire_all()
    refreshed = svc.get_conversation(setup_conversation.id)
    assert refreshed.last_message_at.replace(tzinfo=None) == at.replace(tzinfo=None)


def test_get_conversations_for_participant(db, setup_conversation, setup_stranger):
    svc = ConversationService(db)
    assert [c.id for c in svc.get_conversations(setup_conversation.couple_id)] == [
        setup_conversation.id
    ]
    assert [c.id for c in svc.get_conversations(setup_conversation.vendor_id)] == [
        setup_conversation.id
    ]
    assert svc.get_conversations(setup_stranger.id) == []


def test_other_participant(setup_conversation):
    c = setup_conversation
    assert c.other_participant(c.couple_id) == c.vendor_id
    assert c.other_participant(c.vendor_id) == c.couple_id
    assert c.has_participant(uuid.uuid4()) is False
