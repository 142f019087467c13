"""All SQLAlchemy models – re-exported for Alembic and app use."""

from hydromon.models.plant_profile import MULTIPLANT_NAME, MultiplantProfile, PlantProfile
from hydromon.models.sensor import SensorReading
from hydromon.models.system_config import SystemConfig
from hydromon.models.user_profile import Role, UserProfile

__all__ = [
    "MULTIPLANT_NAME", "PlantProfile", "MultiplantProfile",
    "SensorReading",
    "SystemConfig",
    "Role", "UserProfile",
]
