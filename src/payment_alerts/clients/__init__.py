"""Clients for the services the alert pipeline depends on."""

from .directory import DirectoryService, HttpDirectoryClient
from .orders import HttpOrderClient, OrderService
from .secrets import (
    TELEGRAM_BOT_TOKEN,
    TELEGRAM_CHAT_ID,
    SecretStore,
    SettingsSecretStore,
)

__all__ = [
    "DirectoryService",
    "HttpDirectoryClient",
    "HttpOrderClient",
    "OrderService",
    "SecretStore",
    "SettingsSecretStore",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
]
