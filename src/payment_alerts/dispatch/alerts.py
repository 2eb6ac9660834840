"""Alert rendering and delivery to the Telegram Bot API."""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..clients import TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID, SecretStore
from ..core import PLACEHOLDER, DeliveryError, Disposition, PaymentAlert, SecretNotFoundError
from ..resolvers import is_number

logger = logging.getLogger(__name__)

ALERT_TEMPLATE = (
    "<b>✅ Payment received ({source})</b>\n"
    "🌐 <b>Site:</b> {site}\n"
    "👤 <b>Name:</b> {name}\n"
    "📧 <b>Email:</b> {email}\n"
    "🗒️ <b>Plan:</b> {plan}\n"
    "💵 <b>Amount:</b> {money}\n"
    "🧾 <b>ID:</b> {id}"
)


def escape_html(value: Any = "") -> str:
    """Escape text for Telegram HTML; non-strings are JSON-encoded first."""
    if value is None:
        value = ""
    if not isinstance(value, str):
        try:
            value = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            value = str(value)
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_money(amount: Any, currency: str | None) -> str:
    """
    Render an amount for display.

    Args:
        amount: A number, or a money object with ``value`` or ``amount``
        currency: Currency code, used when the money object has none

    Returns:
        e.g. ``"19.50 USD"``, or the placeholder when there is nothing to show
    """
    if is_number(amount):
        return f"{amount:.2f} {currency or ''}".strip()

    if isinstance(amount, Mapping):
        value_currency = amount.get("currency") or currency or ""
        if is_number(amount.get("value")):
            return f"{amount['value']:.2f} {value_currency}".strip()
        if amount.get("amount") is not None:
            return f"{amount['amount']} {value_currency}".strip()

    return f"0.00 {currency}" if currency else PLACEHOLDER


def render_alert(alert: PaymentAlert, site_label: str) -> str:
    """Render the fixed-layout alert message."""
    return ALERT_TEMPLATE.format(
        source=escape_html(alert.source),
        site=escape_html(site_label),
        name=escape_html(alert.name or PLACEHOLDER),
        email=escape_html(alert.email or PLACEHOLDER),
        plan=escape_html(alert.plan or PLACEHOLDER),
        money=escape_html(format_money(alert.amount, alert.currency)),
        id=escape_html(alert.id or PLACEHOLDER),
    )


class AlertDispatcher:
    """Sends payment alerts to a Telegram chat. Delivery is best effort."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        secrets: SecretStore,
        site_label: str,
        api_base: str = "https://api.telegram.org",
    ):
        self.client = client
        self.secrets = secrets
        self.site_label = site_label
        self.api_base = api_base.rstrip("/")

    async def alert_payment(self, alert: PaymentAlert) -> Disposition:
        """Render and send one alert."""
        text = render_alert(alert, self.site_label)
        if await self.send_message(text):
            logger.info("Sent %s alert for %s", alert.source, alert.id)
            return Disposition.delivered(alert)
        return Disposition.failed("delivery failed", alert=alert)

    async def send_message(self, text: str) -> bool:
        """
        Post a message to the configured chat.

        Returns:
            True on a 2xx response. Failures are logged, never raised.
        """
        try:
            await self._post(text)
        except DeliveryError as e:
            logger.error("Telegram sendMessage failed %s %s", e.status_code, e.body)
            return False
        except SecretNotFoundError as e:
            logger.error("Telegram sendMessage not attempted: %s", e.message)
            return False
        except httpx.HTTPError as e:
            logger.error("Telegram sendMessage failed: %s", e)
            return False
        return True

    async def _post(self, text: str) -> None:
        token = await self.secrets.get(TELEGRAM_BOT_TOKEN)
        chat_id = await self.secrets.get(TELEGRAM_CHAT_ID)

        response = await self.client.post(
            f"{self.api_base}/bot{token}/sendMessage",
            json={
                "chat_id": chat_id,
                "text": text,
                "parse_mode": "HTML",
                "disable_web_page_preview": True,
            },
        )
        if not response.is_success:
            raise DeliveryError(
                "Telegram rejected the message",
                status_code=response.status_code,
                body=response.text,
            )
