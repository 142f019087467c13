from sqlalchemy import Column, Integer, Uuid

from hydromon.database import Base


class SystemConfig(Base):
    """Singleton row naming the active profile.

    selected_plant_id may point at plant_profiles or multiplant_profile,
    so it carries no foreign key.
    """

    __tablename__ = "system_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    selected_plant_id = Column(Uuid, nullable=True)
