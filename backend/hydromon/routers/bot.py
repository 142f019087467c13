"""Telegram bot endpoints: inbound webhook, webhook registration, status probe."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from hydromon.config import settings
from hydromon.database import get_db
from hydromon.dependencies import get_bot
from hydromon.errors import BotNotConfigured
from hydromon.ratelimit import limiter
from hydromon.schemas import SuccessResponse
from hydromon.services.bot_commands import handle_update
from hydromon.services.telegram import TelegramBot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bot"])


def require_bot(bot: Optional[TelegramBot] = Depends(get_bot)) -> TelegramBot:
    if bot is None:
        raise BotNotConfigured()
    return bot


@router.post("/webhook")
@limiter.limit(settings.webhook_rate_limit)
async def telegram_webhook(
    request: Request,
    db: Session = Depends(get_db),
    bot: TelegramBot = Depends(require_bot),
):
    """Process one update pushed by Telegram."""
    try:
        update = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not isinstance(update, dict):
        raise HTTPException(status_code=400, detail="Update must be a JSON object")

    logger.debug("Webhook update received: %s", update.get("update_id"))
    await handle_update(update, bot, db)
    return {"ok": True}


@router.post("/api/set-webhook", response_model=SuccessResponse)
async def set_webhook(bot: TelegramBot = Depends(require_bot)):
    if not settings.telegram_webhook_url:
        raise HTTPException(status_code=400, detail="TELEGRAM_WEBHOOK_URL is not set")
    await bot.replace_webhook(settings.telegram_webhook_url)
    return SuccessResponse(message="Webhook set successfully")


@router.get("/api/bot-status")
async def bot_status(bot: TelegramBot = Depends(require_bot)):
    bot_info = await bot.get_me()
    return {"success": True, "botInfo": bot_info, "message": "Bot is working correctly"}
