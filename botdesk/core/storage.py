"""Storage provider contract and backend selection."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request

from botdesk.config import Settings

from .schema import (
    AnalyticsCreate,
    AnalyticsSnapshot,
    BotConfig,
    BotConfigUpdate,
    Conversation,
    ConversationCreate,
    ConversationUpdate,
    Message,
    MessageCreate,
    MessageTemplate,
    MessageTemplateCreate,
    MessageTemplateUpdate,
    User,
    UserCreate,
)

logger = logging.getLogger(__name__)


class StorageProvider(ABC):
    """
    Data-access contract shared by the in-memory and relational stores.

    Lookups return None for unknown ids; failures of the backing store
    propagate unchanged to the caller.
    """

    kind: str = "unknown"

    # Users
    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    # Conversations
    @abstractmethod
    async def get_conversations(self) -> list[Conversation]:
        """All conversations, most recent activity first."""

    @abstractmethod
    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]: ...

    @abstractmethod
    async def create_conversation(self, data: ConversationCreate) -> Conversation: ...

    @abstractmethod
    async def update_conversation(
        self, conversation_id: str, updates: ConversationUpdate
    ) -> Optional[Conversation]: ...

    # Messages
    @abstractmethod
    async def get_messages(self, conversation_id: str) -> list[Message]:
        """Messages of a conversation in append order."""

    @abstractmethod
    async def create_message(self, data: MessageCreate) -> Message:
        """Store a message and refresh the parent conversation preview."""

    # Bot config
    @abstractmethod
    async def get_bot_config(self) -> Optional[BotConfig]: ...

    @abstractmethod
    async def update_bot_config(self, data: BotConfigUpdate) -> BotConfig:
        """Upsert the singleton, keeping the existing id."""

    # Message templates
    @abstractmethod
    async def get_message_templates(self) -> list[MessageTemplate]: ...

    @abstractmethod
    async def get_message_template(self, template_id: str) -> Optional[MessageTemplate]: ...

    @abstractmethod
    async def create_message_template(self, data: MessageTemplateCreate) -> MessageTemplate: ...

    @abstractmethod
    async def update_message_template(
        self, template_id: str, updates: MessageTemplateUpdate
    ) -> Optional[MessageTemplate]: ...

    @abstractmethod
    async def delete_message_template(self, template_id: str) -> bool:
        """Return True only if a template was removed."""

    # Analytics
    @abstractmethod
    async def get_analytics(self) -> list[AnalyticsSnapshot]:
        """Every snapshot, most recent first."""

    @abstractmethod
    async def create_analytics_entry(self, data: AnalyticsCreate) -> AnalyticsSnapshot: ...

    # Lifecycle
    async def ping(self) -> None:
        """Raise if the backing store is unreachable."""
        await self.get_analytics()

    async def close(self) -> None:
        """Release backend resources."""


def create_storage(settings: Settings) -> StorageProvider:
    """
    Select the storage backend once at startup.

    A configured DATABASE_URL selects the relational store; if it cannot be
    initialized the in-memory store is used instead.
    """
    from .memory import MemoryStorage

    if settings.database_url:
        try:
            from .sql_storage import SqlStorage

            storage = SqlStorage(settings.database_url, seed=settings.seed_database)
            logger.info("Using relational storage: %s", storage.kind)
            return storage
        except Exception:
            logger.warning(
                "Failed to initialize relational storage, falling back to in-memory",
                exc_info=True,
            )
            return MemoryStorage()

    logger.info("Using in-memory storage")
    return MemoryStorage()


def get_storage(request: Request) -> StorageProvider:
    """Get the application's storage provider (dependency injection)."""
    return request.app.state.storage
