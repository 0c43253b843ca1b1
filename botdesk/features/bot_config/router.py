"""Bot configuration API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from botdesk.core.schema import BotConfig, BotConfigUpdate
from botdesk.core.storage import StorageProvider, get_storage

router = APIRouter(prefix="/api/bot-config", tags=["bot-config"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Optional[BotConfig])
async def get_bot_config(storage: StorageProvider = Depends(get_storage)):
    """Get the bot configuration (null until one is saved)."""
    try:
        return await storage.get_bot_config()
    except Exception:
        logger.exception("Failed to fetch bot configuration")
        raise HTTPException(status_code=500, detail="Failed to fetch bot configuration")


@router.put("", response_model=BotConfig)
async def update_bot_config(
    body: BotConfigUpdate,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Save the bot configuration.

    Replaces the single configuration record, creating it on first save.
    Omitted fields fall back to their defaults rather than keeping the
    previous values.
    """
    try:
        config = await storage.update_bot_config(body)
    except Exception:
        logger.exception("Failed to update bot configuration")
        raise HTTPException(status_code=500, detail="Failed to update bot configuration")

    logger.info("Bot configuration saved: active=%s auto_respond=%s", config.is_active, config.auto_respond)
    return config
