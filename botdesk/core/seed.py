"""Demo data loaded into a fresh store so the console is not empty on first run."""

import uuid
from datetime import datetime, timedelta

from .schema import (
    DEFAULT_BOT_NAME,
    DEFAULT_RESPONSE_DELAY_MS,
    AnalyticsSnapshot,
    BotConfig,
    Conversation,
    MessageTemplate,
    User,
)
from .security import hash_password

_AVATAR_PARAMS = (
    "?ixlib=rb-4.0.3&ixid=MnwxMjA3fDB8MHxwaG90by1wYWdlfHx8fGVufDB8fHx8"
    "&auto=format&fit=crop&w=150&h=150"
)


def _avatar(photo_id: str) -> str:
    return f"https://images.unsplash.com/{photo_id}{_AVATAR_PARAMS}"


def _new_id() -> str:
    return str(uuid.uuid4())


def default_users() -> list[User]:
    return [
        User(
            id=_new_id(),
            username="admin",
            password=hash_password("admin"),
            name="John Smith",
            role="admin",
            avatar=_avatar("photo-1472099645785-5658abf4ff4e"),
            created_at=datetime.utcnow(),
        )
    ]


def default_bot_config() -> BotConfig:
    return BotConfig(
        id=_new_id(),
        name=DEFAULT_BOT_NAME,
        welcome_message="Hello! I'm your virtual assistant. How can I help you today?",
        is_active=True,
        auto_respond=True,
        response_delay=DEFAULT_RESPONSE_DELAY_MS,
        updated_at=datetime.utcnow(),
    )


def default_templates() -> list[MessageTemplate]:
    now = datetime.utcnow()
    rows = [
        (
            "Order Status",
            "I can help you check your order status. Please provide your order number.",
            ["order", "status", "track"],
            "support",
            45,
        ),
        (
            "Business Hours",
            "Our business hours are Monday-Friday 9AM-6PM EST. "
            "For urgent matters, please call our emergency line.",
            ["hours", "time", "open"],
            "general",
            23,
        ),
        (
            "Return Policy",
            "You can return items within 30 days of purchase. "
            "Please visit our returns page for more details.",
            ["return", "refund", "policy"],
            "support",
            18,
        ),
    ]
    return [
        MessageTemplate(
            id=_new_id(),
            name=name,
            content=content,
            keywords=keywords,
            category=category,
            is_active=True,
            usage_count=usage_count,
            created_at=now,
        )
        for name, content, keywords, category, usage_count in rows
    ]


def default_conversations() -> list[Conversation]:
    now = datetime.utcnow()
    rows = [
        ("Sarah Johnson", "+1234567890", "photo-1494790108755-2616b612b786",
         "Bot successfully handled product inquiry", 2, "active"),
        ("Michael Chen", "+1234567891", "photo-1507003211169-0a1dd7228f2d",
         "Thanks for the help!", 5, "resolved"),
        ("Emily Rodriguez", "+1234567892", "photo-1438761681033-6461ffad8d80",
         "Bot escalated complex query to human agent", 12, "pending"),
    ]
    return [
        Conversation(
            id=_new_id(),
            customer_name=name,
            customer_phone=phone,
            customer_avatar=_avatar(photo_id),
            last_message=last_message,
            last_message_time=now - timedelta(minutes=minutes_ago),
            status=status,
            is_active=True,
        )
        for name, phone, photo_id, last_message, minutes_ago, status in rows
    ]


def default_analytics() -> list[AnalyticsSnapshot]:
    return [
        AnalyticsSnapshot(
            id=_new_id(),
            date=datetime.utcnow(),
            total_messages=2847,
            active_users=1234,
            bot_responses=892,
            response_rate=94,
            avg_response_time=1200,
            user_satisfaction=48,
        )
    ]
