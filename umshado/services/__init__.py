from umshado.services.beta_request_service import BetaRequestService
from umshado.services.conversation_service import ConversationService
from umshado.services.conversion_service import ConversionService
from umshado.services.directory_service import DirectoryService
from umshado.services.message_service import MessageService
from umshado.services.notification_service import NotificationService
from umshado.services.quote_service import QuoteService

__all__ = [
    "BetaRequestService",
    "ConversationService",
    "ConversionService",
    "DirectoryService",
    "MessageService",
    "NotificationService",
    "QuoteService",
]
