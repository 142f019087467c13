"""Process-wide clients, exposed as FastAPI dependencies so tests can override them."""
from functools import lru_cache
from typing import Optional

from hydromon.config import settings
from hydromon.services.alerts import AlertDispatcher
from hydromon.services.identity import IdentityClient
from hydromon.services.profile_lookup import ChainedProfileLookup, default_profile_lookup
from hydromon.services.telegram import TelegramBot


@lru_cache(maxsize=1)
def get_bot() -> Optional[TelegramBot]:
    if not settings.bot_configured:
        return None
    return TelegramBot(settings.telegram_bot_token)


@lru_cache(maxsize=1)
def get_identity_client() -> IdentityClient:
    return IdentityClient(settings.identity_url, settings.service_role_key)


@lru_cache(maxsize=1)
def get_profile_lookup() -> ChainedProfileLookup:
    return default_profile_lookup()


@lru_cache(maxsize=1)
def get_dispatcher() -> AlertDispatcher:
    return AlertDispatcher(get_bot(), settings.telegram_chat_id, get_profile_lookup())
