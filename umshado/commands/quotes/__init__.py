"""Quote workflow commands."""

from umshado.commands.quotes.create_quote_command import CreateQuoteCommand
from umshado.commands.quotes.transition_quote_command import TransitionQuoteCommand

__all__ = ["CreateQuoteCommand", "TransitionQuoteCommand"]
