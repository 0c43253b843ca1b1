"""In-memory storage provider. Contents are lost on restart."""

import uuid
from datetime import datetime
from typing import Optional

from . import seed
from .schema import (
    DEFAULT_BOT_NAME,
    DEFAULT_RESPONSE_DELAY_MS,
    AnalyticsCreate,
    AnalyticsSnapshot,
    BotConfig,
    BotConfigUpdate,
    Conversation,
    ConversationCreate,
    ConversationStatus,
    ConversationUpdate,
    Message,
    MessageCreate,
    MessageTemplate,
    MessageTemplateCreate,
    MessageTemplateUpdate,
    MessageType,
    User,
    UserCreate,
)
from .security import hash_password
from .storage import StorageProvider


def _sort_key(value: datetime | None) -> datetime:
    return value or datetime.min


class MemoryStorage(StorageProvider):
    """
    Dict-backed store, one mapping per entity family.

    Stored records are replaced on update rather than mutated, so a record
    returned to a caller never changes underneath it.
    """

    kind = "In-Memory"

    def __init__(self, seed_data: bool = True):
        self._users: dict[str, User] = {}
        self._conversations: dict[str, Conversation] = {}
        self._messages: dict[str | None, list[Message]] = {}
        self._bot_config: BotConfig | None = None
        self._templates: dict[str, MessageTemplate] = {}
        self._analytics: dict[str, AnalyticsSnapshot] = {}

        if seed_data:
            self._load_seed()

    def _load_seed(self) -> None:
        for user in seed.default_users():
            self._users[user.id] = user
        self._bot_config = seed.default_bot_config()
        for template in seed.default_templates():
            self._templates[template.id] = template
        for conversation in seed.default_conversations():
            self._conversations[conversation.id] = conversation
        for snapshot in seed.default_analytics():
            self._analytics[snapshot.id] = snapshot

    # Users
    async def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def create_user(self, data: UserCreate) -> User:
        user = User(
            id=str(uuid.uuid4()),
            username=data.username,
            password=hash_password(data.password),
            name=data.name,
            role=data.role or "admin",
            avatar=data.avatar,
            created_at=datetime.utcnow(),
        )
        self._users[user.id] = user
        return user

    # Conversations
    async def get_conversations(self) -> list[Conversation]:
        return sorted(
            self._conversations.values(),
            key=lambda c: _sort_key(c.last_message_time),
            reverse=True,
        )

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self._conversations.get(conversation_id)

    async def create_conversation(self, data: ConversationCreate) -> Conversation:
        conversation = Conversation(
            id=str(uuid.uuid4()),
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            customer_avatar=data.customer_avatar,
            last_message=data.last_message,
            last_message_time=datetime.utcnow(),
            status=data.status or ConversationStatus.ACTIVE.value,
            is_active=True,
        )
        self._conversations[conversation.id] = conversation
        return conversation

    async def update_conversation(
        self, conversation_id: str, updates: ConversationUpdate
    ) -> Optional[Conversation]:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            return None

        updated = conversation.model_copy(update=updates.changes())
        self._conversations[conversation_id] = updated
        return updated

    # Messages
    async def get_messages(self, conversation_id: str) -> list[Message]:
        return list(self._messages.get(conversation_id, []))

    async def create_message(self, data: MessageCreate) -> Message:
        message = Message(
            id=str(uuid.uuid4()),
            conversation_id=data.conversation_id,
            content=data.content,
            is_bot=data.is_bot if data.is_bot is not None else False,
            is_user=data.is_user if data.is_user is not None else True,
            message_type=data.message_type or MessageType.TEXT.value,
            metadata=data.metadata,
            timestamp=datetime.utcnow(),
        )
        self._messages.setdefault(message.conversation_id, []).append(message)

        # Second, independent write: no rollback of the message if this fails.
        conversation = self._conversations.get(message.conversation_id or "")
        if conversation is not None:
            previous = conversation.last_message_time
            self._conversations[conversation.id] = conversation.model_copy(
                update={
                    "last_message": message.content,
                    "last_message_time": max(previous, message.timestamp)
                    if previous
                    else message.timestamp,
                }
            )
        return message

    # Bot config
    async def get_bot_config(self) -> Optional[BotConfig]:
        return self._bot_config

    async def update_bot_config(self, data: BotConfigUpdate) -> BotConfig:
        config = BotConfig(
            id=self._bot_config.id if self._bot_config else str(uuid.uuid4()),
            name=data.name or DEFAULT_BOT_NAME,
            welcome_message=data.welcome_message,
            is_active=data.is_active if data.is_active is not None else True,
            auto_respond=data.auto_respond if data.auto_respond is not None else True,
            response_delay=(
                data.response_delay
                if data.response_delay is not None
                else DEFAULT_RESPONSE_DELAY_MS
            ),
            updated_at=datetime.utcnow(),
        )
        self._bot_config = config
        return config

    # Message templates
    async def get_message_templates(self) -> list[MessageTemplate]:
        return sorted(
            self._templates.values(),
            key=lambda t: _sort_key(t.created_at),
            reverse=True,
        )

    async def get_message_template(self, template_id: str) -> Optional[MessageTemplate]:
        return self._templates.get(template_id)

    async def create_message_template(self, data: MessageTemplateCreate) -> MessageTemplate:
        template = MessageTemplate(
            id=str(uuid.uuid4()),
            name=data.name,
            content=data.content,
            keywords=data.keywords,
            category=data.category,
            is_active=data.is_active if data.is_active is not None else True,
            usage_count=0,
            created_at=datetime.utcnow(),
        )
        self._templates[template.id] = template
        return template

    async def update_message_template(
        self, template_id: str, updates: MessageTemplateUpdate
    ) -> Optional[MessageTemplate]:
        template = self._templates.get(template_id)
        if template is None:
            return None

        updated = template.model_copy(update=updates.changes())
        self._templates[template_id] = updated
        return updated

    async def delete_message_template(self, template_id: str) -> bool:
        return self._templates.pop(template_id, None) is not None

    # Analytics
    async def get_analytics(self) -> list[AnalyticsSnapshot]:
        return sorted(
            self._analytics.values(),
            key=lambda a: _sort_key(a.date),
            reverse=True,
        )

    async def create_analytics_entry(self, data: AnalyticsCreate) -> AnalyticsSnapshot:
        snapshot = AnalyticsSnapshot(
            id=str(uuid.uuid4()),
            date=data.date or datetime.utcnow(),
            total_messages=data.total_messages or 0,
            active_users=data.active_users or 0,
            bot_responses=data.bot_responses or 0,
            response_rate=data.response_rate or 0,
            avg_response_time=data.avg_response_time or 0,
            user_satisfaction=data.user_satisfaction or 0,
        )
        self._analytics[snapshot.id] = snapshot
        return snapshot
