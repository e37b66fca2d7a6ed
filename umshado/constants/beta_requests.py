"""Beta access request states and admin actions."""

from enum import StrEnum


class BetaRequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REVOKED = "revoked"
    REDEEMED = "redeemed"


ACTION_STATUS_MAP = {
    "approve": BetaRequestStatus.APPROVED,
    "revoke": BetaRequestStatus.REVOKED,
    "pending": BetaRequestStatus.PENDING,
    "redeem": BetaRequestStatus.REDEEMED,
}
