"""Entity and insert models shared by the storage providers and the API."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ConversationStatus(str, Enum):
    """Conversation lifecycle status."""

    ACTIVE = "active"
    PENDING = "pending"
    RESOLVED = "resolved"


class MessageType(str, Enum):
    """Kind of message payload."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    TEMPLATE = "template"


DEFAULT_BOT_NAME = "Customer Support Bot"
DEFAULT_RESPONSE_DELAY_MS = 1000


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with the console UI."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC so they compare with server-generated ones."""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class PartialUpdate(CamelModel):
    """Base for PATCH-style payloads."""

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent, ignoring explicit nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


# Users

class User(CamelModel):
    """Console operator account."""

    id: str
    username: str
    password: str  # salted hash, see core.security
    name: str
    role: str = "admin"
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None


class UserCreate(CamelModel):
    """Request model for creating a user."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: Optional[str] = None
    avatar: Optional[str] = None


# Conversations

class Conversation(CamelModel):
    """Customer conversation with its last-message preview."""

    id: str
    customer_name: str
    customer_phone: str
    customer_avatar: Optional[str] = None
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None
    status: ConversationStatus = ConversationStatus.ACTIVE
    is_active: bool = True


class ConversationCreate(CamelModel):
    """Request model for creating a conversation."""

    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    customer_avatar: Optional[str] = None
    last_message: Optional[str] = None
    status: Optional[ConversationStatus] = None


class ConversationUpdate(PartialUpdate):
    """Partial conversation update; only set fields are applied."""

    customer_name: Optional[str] = Field(default=None, min_length=1)
    customer_phone: Optional[str] = Field(default=None, min_length=1)
    customer_avatar: Optional[str] = None
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None
    status: Optional[ConversationStatus] = None
    is_active: Optional[bool] = None

    @field_validator("last_message_time")
    @classmethod
    def normalize_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _naive_utc(value)


# Messages

class Message(CamelModel):
    """Single chat message. Immutable once stored."""

    id: str
    conversation_id: Optional[str] = None
    content: str
    is_bot: bool = False
    is_user: bool = True
    timestamp: Optional[datetime] = None
    message_type: MessageType = MessageType.TEXT
    metadata: Optional[dict[str, Any]] = None


class MessageCreate(CamelModel):
    """Request model for appending a message."""

    conversation_id: Optional[str] = None
    content: str = Field(..., min_length=1)
    is_bot: Optional[bool] = None
    is_user: Optional[bool] = None
    message_type: Optional[MessageType] = None
    metadata: Optional[dict[str, Any]] = None


# Bot configuration

class BotConfig(CamelModel):
    """Singleton bot configuration."""

    id: str
    name: str = DEFAULT_BOT_NAME
    welcome_message: str
    is_active: bool = True
    auto_respond: bool = True
    response_delay: int = DEFAULT_RESPONSE_DELAY_MS  # milliseconds
    updated_at: Optional[datetime] = None


class BotConfigUpdate(CamelModel):
    """Upsert payload for the bot configuration."""

    name: Optional[str] = None
    welcome_message: str = Field(..., min_length=1)
    is_active: Optional[bool] = None
    auto_respond: Optional[bool] = None
    response_delay: Optional[int] = Field(default=None, ge=0)


# Message templates

class MessageTemplate(CamelModel):
    """Canned reply with {{placeholders}} and trigger keywords."""

    id: str
    name: str
    content: str
    keywords: Optional[list[str]] = None
    category: Optional[str] = None
    is_active: bool = True
    usage_count: int = 0
    created_at: Optional[datetime] = None


class MessageTemplateCreate(CamelModel):
    """Request model for creating a template."""

    name: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    keywords: Optional[list[str]] = None
    category: Optional[str] = "general"
    is_active: Optional[bool] = None


class MessageTemplateUpdate(PartialUpdate):
    """Partial template update; only set fields are applied."""

    name: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    keywords: Optional[list[str]] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None


# Analytics

class AnalyticsSnapshot(CamelModel):
    """Dated analytics rollup."""

    id: str
    date: Optional[datetime] = None
    total_messages: int = 0
    active_users: int = 0
    bot_responses: int = 0
    response_rate: int = 0  # percentage
    avg_response_time: int = 0  # milliseconds
    user_satisfaction: int = 0  # tenths of a star, 48 == 4.8/5


class AnalyticsCreate(CamelModel):
    """Request model for recording a snapshot."""

    date: Optional[datetime] = None
    total_messages: Optional[int] = Field(default=None, ge=0)
    active_users: Optional[int] = Field(default=None, ge=0)
    bot_responses: Optional[int] = Field(default=None, ge=0)
    response_rate: Optional[int] = Field(default=None, ge=0, le=100)
    avg_response_time: Optional[int] = Field(default=None, ge=0)
    user_satisfaction: Optional[int] = Field(default=None, ge=0, le=50)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _naive_utc(value)
