"""Replies to Telegram bot commands delivered through the webhook."""
import logging
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from hydromon.errors import BotApiError
from hydromon.models import PlantProfile, SensorReading
from hydromon.services.telegram import TelegramBot

logger = logging.getLogger(__name__)

WELCOME = (
    "Welcome to Hydroponic Monitoring Bot! This bot can show you the current values of "
    "Electrical Conductivity (EC), pH Level, Water Temperature and will send you alerts when "
    "any of the pump is activated. Oh, and it can also show you the optimised level for all "
    "plant profiles."
)

HELP = """🤖 Hydroponic Monitoring Bot Commands:

/start - Welcome message
/ph - Get current pH value
/ec - Get current EC value
/temp - Get current water temperature
/plant - Show plant profiles and optimum ranges

Send any of these commands to get started!"""

ERROR_REPLY = "Sorry, there was an error processing your request."


def _latest_value(db: Session, column) -> Optional[Any]:
    row = db.query(column).order_by(SensorReading.created_at.desc(), SensorReading.id.desc()).first()
    return None if row is None else row[0]


def _reading_reply(column, found: Callable[[Any], str], missing: str) -> Callable[[Session], str]:
    def reply(db: Session) -> str:
        value = _latest_value(db, column)
        return missing if value is None else found(value)
    return reply


def plant_ranges_reply(db: Session) -> str:
    plants = db.query(PlantProfile).order_by(PlantProfile.name).all()
    if not plants:
        return "Could not fetch plant profiles."
    message = "Plant Profiles and Optimum Ranges:\n\n"
    for plant in plants:
        message += f"🌱 {plant.name}\n"
        message += f"  pH: {plant.ph_min} - {plant.ph_max}\n"
        message += f"  EC: {plant.ec_min} - {plant.ec_max}\n\n"
    return message


COMMANDS: dict[str, Callable[[Session], str]] = {
    "/start": lambda db: WELCOME,
    "/ph": _reading_reply(SensorReading.ph, lambda v: f"Current pH value: {v}", "Could not fetch pH value."),
    "/ec": _reading_reply(SensorReading.ec, lambda v: f"Current EC value: {v}", "Could not fetch EC value."),
    "/temp": _reading_reply(
        SensorReading.water_temperature,
        lambda v: f"Current water temperature: {v}°C",
        "Could not fetch water temperature.",
    ),
    "/plant": plant_ranges_reply,
}


def parse_command(text: str) -> str:
    # "/ph@MyBot extra" -> "/ph"
    return text.split()[0].split("@")[0].lower()


def build_reply(text: str, db: Session) -> Optional[str]:
    """Reply for a message text, or None when the bot should stay silent."""
    if not text.startswith("/"):
        return HELP
    handler = COMMANDS.get(parse_command(text))
    if handler is None:
        return None
    try:
        return handler(db)
    except Exception:
        logger.exception("Command %s failed", text)
        return ERROR_REPLY


async def handle_update(update: dict, bot: TelegramBot, db: Session) -> bool:
    """Answer one inbound update. Returns True when a reply was sent.

    A failed send is logged and reported as False; the update is still
    acknowledged.
    """
    message = update.get("message") or update.get("edited_message")
    if not message or not message.get("text"):
        return False

    chat_id = (message.get("chat") or {}).get("id")
    if chat_id is None:
        return False

    reply = build_reply(message["text"].strip(), db)
    if reply is None:
        return False

    try:
        await bot.send_message(chat_id, reply)
    except BotApiError:
        logger.exception("Bot reply to chat %s failed", chat_id)
        return False
    logger.info("Bot reply sent to chat %s", chat_id)
    return True
