"""Unit tests for alert rendering and Telegram delivery."""

import json

import httpx
import pytest

from payment_alerts.clients import SettingsSecretStore
from payment_alerts.config import Settings
from payment_alerts.core import DispositionStatus, PaymentAlert
from payment_alerts.dispatch import AlertDispatcher, escape_html, format_money, render_alert


class TestFormatMoney:
    """Tests for money formatting."""

    @pytest.mark.parametrize(
        "amount,currency,expected",
        [
            (19.5, "USD", "19.50 USD"),
            (20, None, "20.00"),
            ({"value": 7, "currency": "EUR"}, "USD", "7.00 EUR"),
            ({"value": 7}, "USD", "7.00 USD"),
            ({"amount": "12.345"}, "GBP", "12.345 GBP"),
            ({"amount": 0, "currency": "JPY"}, None, "0 JPY"),
            ("12", "USD", "0.00 USD"),
            ({}, "CAD", "0.00 CAD"),
            (None, None, "—"),
        ],
    )
    def test_format_money(self, amount, currency, expected):
        assert format_money(amount, currency) == expected


class TestEscapeHtml:
    """Tests for HTML escaping."""

    def test_escapes_markup(self):
        assert escape_html("<b>Tom & Jerry</b>") == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"

    def test_non_strings_are_json_encoded(self):
        assert escape_html({"id": "<x>"}) == '{"id": "&lt;x&gt;"}'
        assert escape_html(42) == "42"

    def test_none_is_empty(self):
        assert escape_html(None) == ""


class TestRenderAlert:
    """Tests for the message template."""

    def test_renders_every_field(self):
        alert = PaymentAlert(
            source="Invoice",
            name="Ann <Admin>",
            email="ann@example.com",
            plan="Gold & Silver",
            amount=19.5,
            currency="USD",
            id="inv-1",
        )
        text = render_alert(alert, "shop.example")

        assert text.splitlines() == [
            "<b>✅ Payment received (Invoice)</b>",
            "🌐 <b>Site:</b> shop.example",
            "👤 <b>Name:</b> Ann &lt;Admin&gt;",
            "📧 <b>Email:</b> ann@example.com",
            "🗒️ <b>Plan:</b> Gold &amp; Silver",
            "💵 <b>Amount:</b> 19.50 USD",
            "🧾 <b>ID:</b> inv-1",
        ]

    def test_blank_fields_use_placeholder(self):
        text = render_alert(PaymentAlert(source="Stores", name="", plan=None), "site")

        assert "👤 <b>Name:</b> —" in text
        assert "🗒️ <b>Plan:</b> —" in text
        assert "💵 <b>Amount:</b> —" in text
        assert "🧾 <b>ID:</b> —" in text


class TestAlertDispatcher:
    """Tests for delivery to the Bot API."""

    @pytest.fixture
    def secrets(self):
        return SettingsSecretStore(
            Settings(telegram_bot_token="123:abc", telegram_chat_id="-1001", _env_file=None)
        )

    @pytest.fixture
    def alert(self):
        return PaymentAlert(
            source="Stores", name="Ann", email="ann@example.com", amount=5, currency="USD", id="o-1"
        )

    @pytest.mark.asyncio
    async def test_delivers_message(self, secrets, alert):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"ok": True})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            dispatcher = AlertDispatcher(client, secrets, site_label="shop.example")
            disposition = await dispatcher.alert_payment(alert)

        assert disposition.status is DispositionStatus.DELIVERED
        assert disposition.alert == alert
        assert len(requests) == 1
        assert str(requests[0].url) == "https://api.telegram.org/bot123:abc/sendMessage"

        body = json.loads(requests[0].content)
        assert body["chat_id"] == "-1001"
        assert body["parse_mode"] == "HTML"
        assert body["disable_web_page_preview"] is True
        assert "5.00 USD" in body["text"]

    @pytest.mark.asyncio
    async def test_non_2xx_is_failed_not_raised(self, secrets, alert, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="Bad Request: chat not found")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            dispatcher = AlertDispatcher(client, secrets, site_label="shop.example")
            disposition = await dispatcher.alert_payment(alert)

        assert disposition.status is DispositionStatus.FAILED
        assert "chat not found" in caplog.text

    @pytest.mark.asyncio
    async def test_transport_error_is_failed_not_raised(self, secrets, alert):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            dispatcher = AlertDispatcher(client, secrets, site_label="shop.example")
            assert await dispatcher.send_message("hello") is False

    @pytest.mark.asyncio
    async def test_missing_secret_is_failed_not_raised(self, alert):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        secrets = SettingsSecretStore(Settings(_env_file=None))
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            dispatcher = AlertDispatcher(client, secrets, site_label="shop.example")
            disposition = await dispatcher.alert_payment(alert)

        assert disposition.status is DispositionStatus.FAILED
        assert calls == []
