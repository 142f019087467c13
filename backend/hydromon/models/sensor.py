from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, func

from hydromon.database import Base


class SensorReading(Base):
    """One row written by the ingestion hardware. Append-only."""

    __tablename__ = "sensor_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    ph = Column(Float, nullable=True)
    ec = Column(Float, nullable=True)
    water_temperature = Column(Float, nullable=True)
    pump1 = Column(Boolean, nullable=False, default=False)  # EC low, nutrient dosing
    pump2 = Column(Boolean, nullable=False, default=False)  # EC high, water top-up
    pump3 = Column(Boolean, nullable=False, default=False)  # pH low, alkali
    pump4 = Column(Boolean, nullable=False, default=False)  # pH high, acid
    plant_name = Column(String(100), nullable=True, index=True)

    @property
    def active_pumps(self) -> list[int]:
        flags = (self.pump1, self.pump2, self.pump3, self.pump4)
        return [number for number, flag in enumerate(flags, start=1) if flag]

    def __repr__(self):
        return f"<SensorReading(id={self.id}, ph={self.ph}, ec={self.ec})>"
