"""Tests for TransitionQuoteCommand."""

import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from umshado.commands.quotes import TransitionQuoteCommand
from umshado.commands.quotes.transition_quote_command import normalize_status
from umshado.constants.quotes import QuoteStatus
from umshado.exceptions import (
    AuthorizationError,
    InputError,
    InvalidTransition,
    NotFoundError,
)
from umshado.models.conversion import Conversion
from umshado.models.message import Message
from umshado.models.notification import Notification
from umshado.models.quote import Quote
from umshado.schemas.quote import QuoteStatusRequest


def test_vendor_sends_final_quote(db, setup_quote, setup_vendor, setup_conversation):
    body = QuoteStatusRequest(
        quote_id=setup_quote.id,
        status="negotiating",
        vendor_final_price=Decimal("18000"),
        vendor_message="Includes travel.",
    )
    quote = TransitionQuoteCommand(db).execute(setup_vendor.id, body)

    assert quote.status == "negotiating"
    assert Decimal(quote.vendor_final_price) == Decimal("18000")
    assert quote.vendor_message == "Includes travel."

    message = db.query(Message).one()
    assert message.sender_id == setup_vendor.id
    assert message.conversation_id == setup_conversation.id
    assert message.message_text.startswith(
        f"Final quote for {setup_quote.quote_ref}: R18 000"
    )
    assert "Includes travel." in message.message_text

    notification = db.query(Notification).one()
    assert notification.user_id == setup_quote.couple_id
    assert notification.type == "quote_status_updated"
    assert notification.title == f"Final quote received ({setup_quote.quote_ref})"
    assert "R18 000" in notification.body
    assert notification.meta["status"] == "negotiating"
    assert notification.meta["conversationId"] == str(setup_conversation.id)


def test_legacy_sent_status_means_negotiating(db, setup_quote, setup_vendor):
    body = QuoteStatusRequest(
        quote_ref=setup_quote.quote_ref, status="sent", vendor_final_price=9000
    )
    quote = TransitionQuoteCommand(db).execute(setup_vendor.id, body)
    assert quote.status == "negotiating"


def test_vendor_needs_final_price(db, setup_quote, setup_vendor):
    body = QuoteStatusRequest(quote_id=setup_quote.id, status="negotiating")
    with pytest.raises(InputError):
        TransitionQuoteCommand(db).execute(setup_vendor.id, body)
    assert db.query(Message).count() == 0


def test_non_party_is_forbidden_and_nothing_written(
    db, setup_quote, setup_stranger
):
    body = QuoteStatusRequest(quote_id=setup_quote.id, status="accepted")
    with pytest.raises(AuthorizationError):
        TransitionQuoteCommand(db).execute(setup_stranger.id, body)

    db.refresh(setup_quote)
    assert setup_quote.status == "requested"
    assert db.query(Message).count() == 0
    assert db.query(Notification).count() == 0


def test_couple_cannot_send_final_quote(db, setup_quote, setup_couple):
    body = QuoteStatusRequest(
        quote_id=setup_quote.id, status="negotiating", vendor_final_price=1
    )
    with pytest.raises(AuthorizationError):
        TransitionQuoteCommand(db).execute(setup_couple.id, body)


def test_vendor_cannot_accept(db, setup_negotiating_quote, setup_vendor):
    body = QuoteStatusRequest(quote_id=setup_negotiating_quote.id, status="accepted")
    with pytest.raises(AuthorizationError):
        TransitionQuoteCommand(db).execute(setup_vendor.id, body)


def test_couple_accepts(db, setup_negotiating_quote, setup_couple, setup_vendor):
    quote = setup_negotiating_quote
    body = QuoteStatusRequest(quote_id=quote.id, status="accepted")
    updated = TransitionQuoteCommand(db).execute(setup_couple.id, body)

    assert updated.status == "accepted"
    message = db.query(Message).one()
    assert message.message_text == f"Quote {quote.quote_ref} accepted."
    assert message.sender_id == setup_couple.id

    conversion = db.query(Conversion).one()
    assert conversion.quote_id == quote.id
    assert Decimal(conversion.amount) == Decimal("18000")

    notification = db.query(Notification).one()
    assert notification.user_id == setup_vendor.id
    assert notification.title == f"Quote accepted ({quote.quote_ref})"


def test_couple_vendor_fields_are_ignored(db, setup_negotiating_quote, setup_couple):
    body = QuoteStatusRequest(
        quote_id=setup_negotiating_quote.id,
        status="accepted",
        vendor_final_price=1,
        vendor_message="cheaper please",
    )
    updated = TransitionQuoteCommand(db).execute(setup_couple.id, body)
    assert Decimal(updated.vendor_final_price) == Decimal("18000")
    assert updated.vendor_message == "Includes travel."


def test_accept_survives_conversion_failure(
    db, setup_negotiating_quote, setup_couple
):
    with patch(
        "umshado.services.conversion_service.Conversion",
        side_effect=RuntimeError("relation conversions does not exist"),
    ):
        body = QuoteStatusRequest(
            quote_id=setup_negotiating_quote.id, status="accepted"
        )
        updated = TransitionQuoteCommand(db).execute(setup_couple.id, body)

    assert updated.status == "accepted"
    assert db.query(Conversion).count() == 0
    assert db.query(Message).count() == 1
    assert db.query(Notification).count() == 1


def test_accept_survives_notification_failure(
    db, setup_negotiating_quote, setup_couple
):
    body = QuoteStatusRequest(quote_id=setup_negotiating_quote.id, status="accepted")
    with patch.object(db, "add_all", side_effect=SQLAlchemyError("no table")):
        updated = TransitionQuoteCommand(db).execute(setup_couple.id, body)

    assert updated.status == "accepted"
    assert db.query(Quote).one().status == "accepted"
    assert db.query(Message).count() == 1
    assert db.query(Notification).count() == 0


def test_couple_declines(db, setup_negotiating_quote, setup_couple):
    body = QuoteStatusRequest(quote_id=setup_negotiating_quote.id, status="declined")
    updated = TransitionQuoteCommand(db).execute(setup_couple.id, body)
    assert updated.status == "declined"
    assert db.query(Conversion).count() == 0
    notification = db.query(Notification).one()
    assert notification.title.startswith("Quote declined")


def test_repeat_accept_is_noop(db, setup_negotiating_quote, setup_couple):
    body = QuoteStatusRequest(quote_id=setup_negotiating_quote.id, status="accepted")
    command = TransitionQuoteCommand(db)
    command.execute(setup_couple.id, body)
    command.execute(setup_couple.id, body)

    assert db.query(Message).count() == 1
    assert db.query(Notification).count() == 1
    assert db.query(Conversion).count() == 1


def test_decline_after_accept_is_invalid(db, setup_negotiating_quote, setup_couple):
    command = TransitionQuoteCommand(db)
    command.execute(
        setup_couple.id,
        QuoteStatusRequest(quote_id=setup_negotiating_quote.id, status="accepted"),
    )
    with pytest.raises(InvalidTransition):
        command.execute(
            setup_couple.id,
            QuoteStatusRequest(quote_id=setup_negotiating_quote.id, status="declined"),
        )
    assert db.query(Quote).one().status == "accepted"


def test_vendor_resends_new_price(db, setup_negotiating_quote, setup_vendor):
    body = QuoteStatusRequest(
        quote_id=setup_negotiating_quote.id,
        status="negotiating",
        vendor_final_price=Decimal("17500"),
    )
    updated = TransitionQuoteCommand(db).execute(setup_vendor.id, body)
    assert Decimal(updated.vendor_final_price) == Decimal("17500")
    assert "R17 500" in db.query(Message).one().message_text


def test_unknown_quote(db, setup_vendor):
    body = QuoteStatusRequest(quote_id=uuid.uuid4(), status="negotiating")
    with pytest.raises(NotFoundError):
        TransitionQuoteCommand(db).execute(setup_vendor.id, body)


def test_missing_identifier(db, setup_vendor):
    with pytest.raises(InputError):
        TransitionQuoteCommand(db).execute(
            setup_vendor.id, QuoteStatusRequest(status="accepted")
        )


@pytest.mark.parametrize("raw", ["requested", "bogus", "", None])
def test_normalize_status_rejects(raw):
    with pytest.raises(InputError):
        normalize_status(raw)


def test_normalize_status_accepts_case_and_alias():
    assert normalize_status(" Accepted ") == QuoteStatus.ACCEPTED
    assert normalize_status("sent") == QuoteStatus.NEGOTIATING
