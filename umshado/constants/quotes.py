"""Quote lifecycle and pricing enumerations."""

from enum import StrEnum


class QuoteStatus(StrEnum):
    """Quote states; accepted and declined are terminal."""

    REQUESTED = "requested"
    NEGOTIATING = "negotiating"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class PricingMode(StrEnum):
    GUEST_BASED = "guest-based"
    TIME_BASED = "time-based"
    PER_PERSON = "per-person"
    PACKAGE_BASED = "package-based"
    EVENT_BASED = "event-based"
    QUANTITY_BASED = "quantity-based"


class ParticipantRole(StrEnum):
    COUPLE = "couple"
    VENDOR = "vendor"


# Older clients send "sent" for a vendor's final quote
STATUS_ALIASES = {"sent": QuoteStatus.NEGOTIATING}
