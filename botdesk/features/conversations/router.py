"""Conversation and message API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from botdesk.config import get_settings
from botdesk.core.rate_limiter import limiter
from botdesk.core.schema import (
    Conversation,
    ConversationCreate,
    ConversationUpdate,
    Message,
)
from botdesk.core.storage import StorageProvider, get_storage

from .models import MessageBody

router = APIRouter(prefix="/api/conversations", tags=["conversations"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[Conversation])
async def list_conversations(storage: StorageProvider = Depends(get_storage)):
    """List conversations, most recent activity first."""
    try:
        return await storage.get_conversations()
    except Exception:
        logger.exception("Failed to fetch conversations")
        raise HTTPException(status_code=500, detail="Failed to fetch conversations")


@router.get("/{conversation_id}", response_model=Conversation)
async def get_conversation(
    conversation_id: str,
    storage: StorageProvider = Depends(get_storage),
):
    """Get a single conversation."""
    try:
        conversation = await storage.get_conversation(conversation_id)
    except Exception:
        logger.exception("Failed to fetch conversation %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to fetch conversation")

    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


@router.post("", response_model=Conversation, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    body: ConversationCreate,
    storage: StorageProvider = Depends(get_storage),
):
    """Create a conversation. Status defaults to active."""
    try:
        return await storage.create_conversation(body)
    except Exception:
        logger.exception("Failed to create conversation")
        raise HTTPException(status_code=500, detail="Failed to create conversation")


@router.patch("/{conversation_id}", response_model=Conversation)
async def update_conversation(
    conversation_id: str,
    body: ConversationUpdate,
    storage: StorageProvider = Depends(get_storage),
):
    """Partially update a conversation, e.g. to resolve it."""
    try:
        conversation = await storage.update_conversation(conversation_id, body)
    except Exception:
        logger.exception("Failed to update conversation %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to update conversation")

    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


@router.get("/{conversation_id}/messages", response_model=list[Message])
async def list_messages(
    conversation_id: str,
    storage: StorageProvider = Depends(get_storage),
):
    """List the messages of a conversation, oldest first."""
    try:
        return await storage.get_messages(conversation_id)
    except Exception:
        logger.exception("Failed to fetch messages for %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to fetch messages")


@router.post(
    "/{conversation_id}/messages",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(lambda: get_settings().message_rate_limit)
async def create_message(
    request: Request,
    conversation_id: str,
    body: MessageBody,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Append a message to a conversation.

    The conversation's last message preview and activity time are refreshed
    by the storage provider as part of the same call.
    """
    try:
        conversation = await storage.get_conversation(conversation_id)
    except Exception:
        logger.exception("Failed to fetch conversation %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to create message")

    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")

    try:
        return await storage.create_message(body.for_conversation(conversation_id))
    except Exception:
        logger.exception("Failed to create message in %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to create message")
