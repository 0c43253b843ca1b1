"""Pydantic models for the conversations feature."""

from typing import Any, Optional

from pydantic import Field

from botdesk.core.schema import CamelModel, MessageCreate, MessageType


class MessageBody(CamelModel):
    """Message posted to a conversation; the owner comes from the URL."""

    content: str = Field(..., min_length=1, max_length=4000)
    is_bot: Optional[bool] = None
    is_user: Optional[bool] = None
    message_type: Optional[MessageType] = None
    metadata: Optional[dict[str, Any]] = None

    def for_conversation(self, conversation_id: str) -> MessageCreate:
        return MessageCreate(
            conversation_id=conversation_id,
            **self.model_dump(exclude_unset=True),
        )
