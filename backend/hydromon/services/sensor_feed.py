"""Feed newly inserted sensor_data rows to the alert dispatcher."""
import logging
from typing import Callable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from hydromon.models import SensorReading
from hydromon.services.alerts import AlertDispatcher

logger = logging.getLogger(__name__)


class SensorFeed:
    """Id-cursor over sensor_data.

    The cursor starts at the newest existing row, so only readings inserted
    after start-up are delivered, oldest first.
    """

    def __init__(self, dispatcher: AlertDispatcher, session_factory: Callable[[], Session], batch_size: int = 100):
        self.dispatcher = dispatcher
        self.session_factory = session_factory
        self.batch_size = batch_size
        self.cursor: Optional[int] = None

    def prime(self, db: Session) -> None:
        self.cursor = db.query(func.max(SensorReading.id)).scalar() or 0
        logger.info("Sensor feed starting after reading id %s", self.cursor)

    def fetch_new(self, db: Session) -> list[SensorReading]:
        return (
            db.query(SensorReading)
            .filter(SensorReading.id > self.cursor)
            .order_by(SensorReading.id)
            .limit(self.batch_size)
            .all()
        )

    async def poll(self) -> int:
        """Deliver pending readings. Returns how many were delivered."""
        db = self.session_factory()
        try:
            if self.cursor is None:
                self.prime(db)
                return 0
            rows = self.fetch_new(db)
            for row in rows:
                self.cursor = row.id
                await self.dispatcher.handle(row, db)
            return len(rows)
        except Exception as e:
            logger.error(f"Sensor feed poll failed: {e}")
            return 0
        finally:
            db.close()
