"""Exceptions raised by upstream clients and translated into flat JSON errors."""
from typing import Optional


class UpstreamError(Exception):
    """A call to an external dependency failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class IdentityServiceError(UpstreamError):
    pass


class BotApiError(UpstreamError):
    pass


class BotNotConfigured(BotApiError):
    def __init__(self):
        super().__init__("Telegram bot is not configured")
