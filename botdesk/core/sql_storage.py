"""Relational storage provider backed by SQLAlchemy."""

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from . import seed as seed_data
from .database import (
    AnalyticsRow,
    Base,
    BotConfigRow,
    ConversationRow,
    MessageRow,
    MessageTemplateRow,
    UserRow,
    build_engine,
)
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

logger = logging.getLogger(__name__)


def _to_message(row: MessageRow) -> Message:
    return Message(
        id=row.id,
        conversation_id=row.conversation_id,
        content=row.content,
        is_bot=bool(row.is_bot),
        is_user=bool(row.is_user),
        timestamp=row.timestamp,
        message_type=row.message_type or MessageType.TEXT.value,
        metadata=row.message_metadata,
    )


class SqlStorage(StorageProvider):
    """
    One table per entity family, one short-lived session per operation.

    Construction creates missing tables, which also verifies that the
    database is reachable; a failure there is what triggers the in-memory
    fallback in create_storage().
    """

    def __init__(self, database_url: str, seed: bool = False):
        self.engine = build_engine(database_url)
        self.kind = f"SQL ({self.engine.dialect.name})"
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )
        Base.metadata.create_all(bind=self.engine)

        if seed:
            self.seed()

    def _session(self) -> Session:
        return self._session_factory()

    def seed(self) -> None:
        """Load demo data into empty tables."""
        with self._session() as db:
            if db.scalar(select(func.count()).select_from(ConversationRow)):
                logger.info("Database already contains data, skipping seed")
                return

            db.add_all(UserRow(**u.model_dump()) for u in seed_data.default_users())
            db.add(BotConfigRow(**seed_data.default_bot_config().model_dump()))
            db.add_all(MessageTemplateRow(**t.model_dump()) for t in seed_data.default_templates())
            db.add_all(ConversationRow(**c.model_dump()) for c in seed_data.default_conversations())
            db.add_all(AnalyticsRow(**a.model_dump()) for a in seed_data.default_analytics())
            db.commit()
        logger.info("Seeded database with demo data")

    # Users
    async def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as db:
            row = db.get(UserRow, user_id)
            return User.model_validate(row) if row else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            row = db.scalars(select(UserRow).where(UserRow.username == username)).first()
            return User.model_validate(row) if row else None

    async def create_user(self, data: UserCreate) -> User:
        row = UserRow(
            id=str(uuid.uuid4()),
            username=data.username,
            password=hash_password(data.password),
            name=data.name,
            role=data.role or "admin",
            avatar=data.avatar,
            created_at=datetime.utcnow(),
        )
        with self._session() as db:
            db.add(row)
            db.commit()
            return User.model_validate(row)

    # Conversations
    async def get_conversations(self) -> list[Conversation]:
        with self._session() as db:
            rows = db.scalars(
                select(ConversationRow).order_by(
                    ConversationRow.last_message_time.desc().nullslast()
                )
            ).all()
            return [Conversation.model_validate(row) for row in rows]

    async def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        with self._session() as db:
            row = db.get(ConversationRow, conversation_id)
            return Conversation.model_validate(row) if row else None

    async def create_conversation(self, data: ConversationCreate) -> Conversation:
        row = ConversationRow(
            id=str(uuid.uuid4()),
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            customer_avatar=data.customer_avatar,
            last_message=data.last_message,
            last_message_time=datetime.utcnow(),
            status=data.status or ConversationStatus.ACTIVE.value,
            is_active=True,
        )
        with self._session() as db:
            db.add(row)
            db.commit()
            return Conversation.model_validate(row)

    async def update_conversation(
        self, conversation_id: str, updates: ConversationUpdate
    ) -> Optional[Conversation]:
        with self._session() as db:
            row = db.get(ConversationRow, conversation_id)
            if row is None:
                return None

            for field, value in updates.changes().items():
                setattr(row, field, value)
            db.commit()
            return Conversation.model_validate(row)

    # Messages
    async def get_messages(self, conversation_id: str) -> list[Message]:
        with self._session() as db:
            rows = db.scalars(
                select(MessageRow)
                .where(MessageRow.conversation_id == conversation_id)
                .order_by(MessageRow.timestamp.asc())
            ).all()
            return [_to_message(row) for row in rows]

    async def create_message(self, data: MessageCreate) -> Message:
        now = datetime.utcnow()
        row = MessageRow(
            id=str(uuid.uuid4()),
            conversation_id=data.conversation_id,
            content=data.content,
            is_bot=data.is_bot if data.is_bot is not None else False,
            is_user=data.is_user if data.is_user is not None else True,
            message_type=data.message_type or MessageType.TEXT.value,
            message_metadata=data.metadata,
            timestamp=now,
        )

        # Message insert and preview refresh commit together.
        with self._session() as db:
            db.add(row)
            if data.conversation_id:
                conversation = db.get(ConversationRow, data.conversation_id)
                if conversation is not None:
                    conversation.last_message = data.content
                    previous = conversation.last_message_time
                    conversation.last_message_time = max(previous, now) if previous else now
            db.commit()
            return _to_message(row)

    # Bot config
    async def get_bot_config(self) -> Optional[BotConfig]:
        with self._session() as db:
            row = db.scalars(select(BotConfigRow).limit(1)).first()
            return BotConfig.model_validate(row) if row else None

    async def update_bot_config(self, data: BotConfigUpdate) -> BotConfig:
        values = {
            "name": data.name or DEFAULT_BOT_NAME,
            "welcome_message": data.welcome_message,
            "is_active": data.is_active if data.is_active is not None else True,
            "auto_respond": data.auto_respond if data.auto_respond is not None else True,
            "response_delay": (
                data.response_delay
                if data.response_delay is not None
                else DEFAULT_RESPONSE_DELAY_MS
            ),
            "updated_at": datetime.utcnow(),
        }

        with self._session() as db:
            row = db.scalars(select(BotConfigRow).limit(1)).first()
            if row is None:
                row = BotConfigRow(id=str(uuid.uuid4()), **values)
                db.add(row)
            else:
                for field, value in values.items():
                    setattr(row, field, value)
            db.commit()
            return BotConfig.model_validate(row)

    # Message templates
    async def get_message_templates(self) -> list[MessageTemplate]:
        with self._session() as db:
            rows = db.scalars(
                select(MessageTemplateRow).order_by(
                    MessageTemplateRow.created_at.desc().nullslast()
                )
            ).all()
            return [MessageTemplate.model_validate(row) for row in rows]

    async def get_message_template(self, template_id: str) -> Optional[MessageTemplate]:
        with self._session() as db:
            row = db.get(MessageTemplateRow, template_id)
            return MessageTemplate.model_validate(row) if row else None

    async def create_message_template(self, data: MessageTemplateCreate) -> MessageTemplate:
        row = MessageTemplateRow(
            id=str(uuid.uuid4()),
            name=data.name,
            content=data.content,
            keywords=data.keywords,
            category=data.category,
            is_active=data.is_active if data.is_active is not None else True,
            usage_count=0,
            created_at=datetime.utcnow(),
        )
        with self._session() as db:
            db.add(row)
            db.commit()
            return MessageTemplate.model_validate(row)

    async def update_message_template(
        self, template_id: str, updates: MessageTemplateUpdate
    ) -> Optional[MessageTemplate]:
        with self._session() as db:
            row = db.get(MessageTemplateRow, template_id)
            if row is None:
                return None

            for field, value in updates.changes().items():
                setattr(row, field, value)
            db.commit()
            return MessageTemplate.model_validate(row)

    async def delete_message_template(self, template_id: str) -> bool:
        with self._session() as db:
            result = db.execute(
                delete(MessageTemplateRow).where(MessageTemplateRow.id == template_id)
            )
            db.commit()
            return result.rowcount > 0

    # Analytics
    async def get_analytics(self) -> list[AnalyticsSnapshot]:
        with self._session() as db:
            rows = db.scalars(
                select(AnalyticsRow).order_by(AnalyticsRow.date.desc().nullslast())
            ).all()
            return [AnalyticsSnapshot.model_validate(row) for row in rows]

    async def create_analytics_entry(self, data: AnalyticsCreate) -> AnalyticsSnapshot:
        row = AnalyticsRow(
            id=str(uuid.uuid4()),
            date=data.date or datetime.utcnow(),
            total_messages=data.total_messages or 0,
            active_users=data.active_users or 0,
            bot_responses=data.bot_responses or 0,
            response_rate=data.response_rate or 0,
            avg_response_time=data.avg_response_time or 0,
            user_satisfaction=data.user_satisfaction or 0,
        )
        with self._session() as db:
            db.add(row)
            db.commit()
            return AnalyticsSnapshot.model_validate(row)

    # Lifecycle
    async def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(select(1))

    async def close(self) -> None:
        self.engine.dispose()
