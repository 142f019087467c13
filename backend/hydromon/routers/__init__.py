from hydromon.routers.bot import router as bot_router
from hydromon.routers.multiplant import router as multiplant_router
from hydromon.routers.plants import router as plants_router
from hydromon.routers.sensor_data import router as sensor_data_router
from hydromon.routers.system_config import router as system_config_router
from hydromon.routers.users import router as users_router

__all__ = [
    "bot_router", "multiplant_router", "plants_router",
    "sensor_data_router", "system_config_router", "users_router",
]
