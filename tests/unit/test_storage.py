"""Storage provider contract tests, run against every backend."""

import pytest

from botdesk.core.schema import (
    AnalyticsCreate,
    BotConfigUpdate,
    ConversationCreate,
    ConversationUpdate,
    MessageCreate,
    MessageTemplateCreate,
    MessageTemplateUpdate,
    UserCreate,
)
from botdesk.core.security import verify_password


@pytest.mark.asyncio
async def test_seed_data_is_loaded(storage):
    assert len(await storage.get_conversations()) == 3
    assert len(await storage.get_message_templates()) == 3
    assert len(await storage.get_analytics()) == 1

    config = await storage.get_bot_config()
    assert config is not None
    assert config.name == "Customer Support Bot"

    admin = await storage.get_user_by_username("admin")
    assert admin is not None
    assert admin.name == "John Smith"
    assert admin.password != "admin"
    assert verify_password("admin", admin.password)


@pytest.mark.asyncio
async def test_conversations_sorted_most_recent_first(storage):
    conversations = await storage.get_conversations()
    assert [c.customer_name for c in conversations] == [
        "Sarah Johnson",
        "Michael Chen",
        "Emily Rodriguez",
    ]

    created = await storage.create_conversation(
        ConversationCreate(customer_name="New Customer", customer_phone="+15550000000")
    )
    conversations = await storage.get_conversations()
    assert conversations[0].id == created.id
    times = [c.last_message_time for c in conversations]
    assert times == sorted(times, reverse=True)


@pytest.mark.asyncio
async def test_create_conversation_defaults(storage):
    conversation = await storage.create_conversation(
        ConversationCreate(customer_name="Ana", customer_phone="+15551112222")
    )

    assert conversation.status == "active"
    assert conversation.is_active is True
    assert conversation.last_message_time is not None
    assert await storage.get_conversation(conversation.id) == conversation


@pytest.mark.asyncio
async def test_create_conversation_keeps_explicit_status(storage):
    conversation = await storage.create_conversation(
        ConversationCreate(customer_name="Ana", customer_phone="+15551112222", status="pending")
    )
    assert conversation.status == "pending"


@pytest.mark.asyncio
async def test_get_unknown_conversation_returns_none(storage):
    assert await storage.get_conversation("missing") is None


@pytest.mark.asyncio
async def test_update_conversation_applies_only_sent_fields(storage):
    conversation = (await storage.get_conversations())[0]

    updated = await storage.update_conversation(
        conversation.id, ConversationUpdate(status="resolved")
    )

    assert updated.status == "resolved"
    assert updated.customer_name == conversation.customer_name
    assert updated.last_message == conversation.last_message
    assert (await storage.get_conversation(conversation.id)).status == "resolved"


@pytest.mark.asyncio
async def test_update_unknown_conversation_returns_none(storage):
    assert await storage.update_conversation("missing", ConversationUpdate(status="resolved")) is None


@pytest.mark.asyncio
async def test_create_message_refreshes_conversation_preview(storage):
    conversation = (await storage.get_conversations())[-1]
    before = conversation.last_message_time

    message = await storage.create_message(
        MessageCreate(conversation_id=conversation.id, content="Where is my order?")
    )

    assert message.is_bot is False
    assert message.is_user is True
    assert message.message_type == "text"
    assert message.metadata is None

    refreshed = await storage.get_conversation(conversation.id)
    assert refreshed.last_message == "Where is my order?"
    assert refreshed.last_message_time >= before
    assert (await storage.get_conversations())[0].id == conversation.id


@pytest.mark.asyncio
async def test_messages_listed_in_append_order(storage):
    conversation = await storage.create_conversation(
        ConversationCreate(customer_name="Ana", customer_phone="+15551112222")
    )
    await storage.create_message(MessageCreate(conversation_id=conversation.id, content="first"))
    await storage.create_message(
        MessageCreate(
            conversation_id=conversation.id,
            content="second",
            is_bot=True,
            is_user=False,
            message_type="template",
            metadata={"templateId": "abc"},
        )
    )

    messages = await storage.get_messages(conversation.id)

    assert [m.content for m in messages] == ["first", "second"]
    assert messages[1].is_bot is True
    assert messages[1].message_type == "template"
    assert messages[1].metadata == {"templateId": "abc"}
    assert await storage.get_messages("other") == []


@pytest.mark.asyncio
async def test_message_without_conversation_is_stored(storage):
    message = await storage.create_message(MessageCreate(content="orphan"))
    assert message.conversation_id is None


@pytest.mark.asyncio
async def test_update_bot_config_is_a_singleton_upsert(storage):
    existing = await storage.get_bot_config()

    first = await storage.update_bot_config(BotConfigUpdate(welcome_message="Hi!"))
    second = await storage.update_bot_config(
        BotConfigUpdate(name="Sales Bot", welcome_message="Hello", auto_respond=False, response_delay=250)
    )

    assert first.id == existing.id
    assert second.id == first.id
    assert second.name == "Sales Bot"
    assert second.auto_respond is False
    assert second.response_delay == 250
    assert (await storage.get_bot_config()) == second


@pytest.mark.asyncio
async def test_update_bot_config_defaults_missing_fields(storage):
    await storage.update_bot_config(
        BotConfigUpdate(name="Custom", welcome_message="Hi", is_active=False, response_delay=10)
    )

    config = await storage.update_bot_config(BotConfigUpdate(welcome_message="Hey"))

    assert config.name == "Customer Support Bot"
    assert config.is_active is True
    assert config.auto_respond is True
    assert config.response_delay == 1000


@pytest.mark.asyncio
async def test_template_crud(storage):
    template = await storage.create_message_template(
        MessageTemplateCreate(
            name="Greeting",
            content="Hi {{customer_name}}!",
            keywords=["hi", "hello"],
        )
    )
    assert template.usage_count == 0
    assert template.is_active is True
    assert template.category == "general"
    assert (await storage.get_message_templates())[0].id == template.id

    updated = await storage.update_message_template(
        template.id, MessageTemplateUpdate(content="Hello {{customer_name}}!")
    )
    assert updated.content == "Hello {{customer_name}}!"
    assert updated.name == "Greeting"
    assert updated.keywords == ["hi", "hello"]

    assert await storage.delete_message_template(template.id) is True
    assert await storage.get_message_template(template.id) is None
    assert await storage.delete_message_template(template.id) is False


@pytest.mark.asyncio
async def test_update_unknown_template_returns_none(storage):
    assert await storage.update_message_template("missing", MessageTemplateUpdate(name="x")) is None


@pytest.mark.asyncio
async def test_delete_unknown_template_returns_false(storage):
    assert await storage.delete_message_template("missing") is False


@pytest.mark.asyncio
async def test_analytics_most_recent_first(storage):
    seeded = (await storage.get_analytics())[0]

    entry = await storage.create_analytics_entry(AnalyticsCreate(total_messages=10))

    snapshots = await storage.get_analytics()
    assert [s.id for s in snapshots] == [entry.id, seeded.id]
    assert entry.active_users == 0
    assert entry.user_satisfaction == 0
    assert seeded.user_satisfaction == 48


@pytest.mark.asyncio
async def test_create_user_hashes_password(storage):
    user = await storage.create_user(UserCreate(username="agent", password="s3cret", name="Agent"))

    assert user.role == "admin"
    assert verify_password("s3cret", user.password)
    assert not verify_password("wrong", user.password)
    assert await storage.get_user(user.id) == user
    assert await storage.get_user_by_username("nobody") is None
