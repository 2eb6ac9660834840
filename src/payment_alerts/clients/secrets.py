"""Secret lookup for the messaging credentials."""

from typing import Protocol

from ..config import Settings
from ..core import SecretNotFoundError

TELEGRAM_BOT_TOKEN = "TELEGRAM_BOT_TOKEN"
TELEGRAM_CHAT_ID = "TELEGRAM_CHAT_ID"


class SecretStore(Protocol):
    async def get(self, name: str) -> str:
        ...


class SettingsSecretStore:
    """Serves secrets from application settings (environment or .env)."""

    def __init__(self, settings: Settings):
        self._secrets = {
            TELEGRAM_BOT_TOKEN: settings.telegram_bot_token.get_secret_value(),
            TELEGRAM_CHAT_ID: settings.telegram_chat_id,
        }

    async def get(self, name: str) -> str:
        value = self._secrets.get(name)
        if not value:
            raise SecretNotFoundError(name)
        return value
