from umshado.models.beta_request import BetaRequest
from umshado.models.conversation import Conversation
from umshado.models.conversion import Conversion
from umshado.models.message import Message
from umshado.models.notification import Notification
from umshado.models.profile import Profile
from umshado.models.quote import Quote
from umshado.models.vendor import Vendor

__all__ = [
    "BetaRequest",
    "Conversation",
    "Conversion",
    "Message",
    "Notification",
    "Profile",
    "Quote",
    "Vendor",
]
