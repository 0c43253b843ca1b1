"""SQLAlchemy table mappings and engine setup for the relational store."""

import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_uuid)
    username = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default="admin")
    avatar = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class ConversationRow(Base):
    __tablename__ = "conversations"

    id = Column(String, primary_key=True, default=_uuid)
    customer_name = Column(Text, nullable=False)
    customer_phone = Column(Text, nullable=False)
    customer_avatar = Column(Text, nullable=True)
    last_message = Column(Text, nullable=True)
    last_message_time = Column(DateTime, server_default=func.now(), index=True)
    status = Column(Text, nullable=False, default="active")  # active/pending/resolved
    is_active = Column(Boolean, default=True)


class MessageRow(Base):
    __tablename__ = "messages"

    id = Column(String, primary_key=True, default=_uuid)
    conversation_id = Column(String, ForeignKey("conversations.id"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    is_bot = Column(Boolean, default=False)
    is_user = Column(Boolean, default=True)
    timestamp = Column(DateTime, server_default=func.now())
    message_type = Column(Text, default="text")  # text/image/file/template

    # "metadata" is reserved on declarative classes
    message_metadata = Column("metadata", JSON, nullable=True)


class BotConfigRow(Base):
    __tablename__ = "bot_config"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(Text, nullable=False, default="Customer Support Bot")
    welcome_message = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True)
    auto_respond = Column(Boolean, default=True)
    response_delay = Column(Integer, default=1000)  # milliseconds
    updated_at = Column(DateTime, server_default=func.now())


class MessageTemplateRow(Base):
    __tablename__ = "message_templates"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    keywords = Column(JSON, nullable=True)
    category = Column(Text, default="general")
    is_active = Column(Boolean, default=True)
    usage_count = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())


class AnalyticsRow(Base):
    __tablename__ = "analytics"

    id = Column(String, primary_key=True, default=_uuid)
    date = Column(DateTime, server_default=func.now(), index=True)
    total_messages = Column(Integer, default=0)
    active_users = Column(Integer, default=0)
    bot_responses = Column(Integer, default=0)
    response_rate = Column(Integer, default=0)  # percentage
    avg_response_time = Column(Integer, default=0)  # milliseconds
    user_satisfaction = Column(Integer, default=0)  # tenths of a star


def build_engine(database_url: str) -> Engine:
    """Create an engine, with the connection settings SQLite needs."""
    engine_kwargs: dict = {"url": database_url, "pool_pre_ping": True}

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite lives inside one connection; share it.
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool

    return create_engine(**engine_kwargs)
