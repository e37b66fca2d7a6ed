"""Beta access review and invite token commands."""

from umshado.commands.invites.invite_token_command import InviteTokenCommand
from umshado.commands.invites.review_beta_request_command import (
    ReviewBetaRequestCommand,
)

__all__ = ["InviteTokenCommand", "ReviewBetaRequestCommand"]
