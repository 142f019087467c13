"""Pump alert relay.

Each newly observed sensor reading is checked for pump activations. If any
pump fired, one Telegram message describing every active pump is sent to the
configured chat. A reading id repeated immediately after itself is ignored.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from hydromon.models import SensorReading
from hydromon.services.profile_lookup import ChainedProfileLookup, ProfileFound
from hydromon.services.telegram import TelegramBot

logger = logging.getLogger(__name__)

UNKNOWN_PLANT = "Unknown Plant"

# pump number -> (headline, reading attribute, label)
PUMP_ALERTS = {
    1: ("EC too low! Add Solution A+B.", "ec", "EC"),
    2: ("EC too high! Add water.", "ec", "EC"),
    3: ("pH too low! Add alkali.", "ph", "pH"),
    4: ("pH too high! Add acid.", "ph", "pH"),
}


@dataclass
class DispatcherState:
    """Most recent reading id seen in this process. Not persisted."""

    last_seen_id: Optional[int] = None


def format_alert(reading: SensorReading, plant_name: str) -> str:
    paragraphs = []
    for pump in reading.active_pumps:
        headline, attr, label = PUMP_ALERTS[pump]
        paragraphs.append(
            f"⚠️ {headline}\n"
            f"🚰 Pump {pump} activated\n"
            f"📊 {label}: {getattr(reading, attr)}\n"
            f"🌱 Plant: {plant_name}\n\n"
        )
    return "".join(paragraphs)


class AlertDispatcher:
    def __init__(
        self,
        bot: Optional[TelegramBot],
        chat_id: Optional[str],
        lookup: ChainedProfileLookup,
        state: Optional[DispatcherState] = None,
    ):
        self.bot = bot
        self.chat_id = chat_id
        self.lookup = lookup
        self.state = state if state is not None else DispatcherState()

    def resolve_plant_name(self, db: Session) -> str:
        result = self.lookup.find_selected(db)
        if isinstance(result, ProfileFound):
            return result.name
        logger.warning("Selected plant %s not found, alerting as '%s'", result.profile_id, UNKNOWN_PLANT)
        return UNKNOWN_PLANT

    async def handle(self, reading: SensorReading, db: Session) -> bool:
        """Process one reading. Returns True when an alert was sent."""
        if reading.id == self.state.last_seen_id:
            logger.debug("Reading %s already processed", reading.id)
            return False
        self.state.last_seen_id = reading.id

        if not reading.active_pumps:
            return False

        try:
            plant_name = self.resolve_plant_name(db)
        except Exception:
            logger.exception("Plant lookup failed for reading %s", reading.id)
            plant_name = UNKNOWN_PLANT

        message = format_alert(reading, plant_name)
        if self.bot is None or not self.chat_id:
            logger.warning("Bot not configured, dropping alert for reading %s", reading.id)
            return False

        try:
            await self.bot.send_message(self.chat_id, message)
        except Exception:
            logger.exception("Failed to send alert for reading %s", reading.id)
            return False

        logger.info("Alert sent for reading %s (pumps %s)", reading.id, reading.active_pumps)
        return True
