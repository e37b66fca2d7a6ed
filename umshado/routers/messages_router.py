"""Messages API: send a message and read conversations the caller is part of."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from umshado.auth.dependencies import get_current_user
from umshado.commands.messages import SendMessageCommand
from umshado.db import get_db
from umshado.exceptions import AuthorizationError, NotFoundError
from umshado.schemas.auth import AuthUser
from umshado.schemas.message import (
    ConversationRead,
    MessageRead,
    MessageSendRequest,
    MessageSendResult,
)
from umshado.services.conversation_service import ConversationService
from umshado.services.message_service import MessageService

router = APIRouter(tags=["messages"])


@router.post("/messages/send", response_model=MessageSendResult)
def send_message(
    body: MessageSendRequest,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageSendResult:
    """Send a message; the receiver is notified at most once per thread per minute."""
    message = SendMessageCommand(db).execute(
        current_user.id, body.conversation_id, body.message_text
    )
    return MessageSendResult(message_id=message.id, created_at=message.created_at)


@router.get("/conversations", response_model=Page[ConversationRead])
def list_conversations(
    params: Params = Depends(),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Page[ConversationRead]:
    """List the caller's conversations, most recent activity first."""
    query = ConversationService(db).get_conversations_query(current_user.id)
    return paginate(query, params=params)


@router.get(
    "/conversations/{conversation_id}/messages", response_model=Page[MessageRead]
)
def list_conversation_messages(
    conversation_id: UUID,
    params: Params = Depends(),
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Page[MessageRead]:
    """List messages in a conversation, oldest first. Participants only."""
    conversation = ConversationService(db).get_conversation(conversation_id)
    if conversation is None:
        raise NotFoundError("Conversation not found")
    if not conversation.has_participant(current_user.id):
        raise AuthorizationError("Not a participant")
    query = MessageService(db).get_messages_query(conversation_id)
    return paginate(query, params=params)
