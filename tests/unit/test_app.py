"""Unit tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from conftest import RecordingDispatcher
from payment_alerts.config import AlertPolicy, Settings
from payment_alerts.handlers import build_registry
from payment_alerts.main import create_app


@pytest.fixture
def client(buyers, orders):
    dispatcher = RecordingDispatcher()
    app = create_app()
    app.state.dispatcher = dispatcher
    app.state.registry = build_registry(buyers, dispatcher, orders, AlertPolicy())

    with TestClient(app) as test_client:
        test_client.dispatcher = dispatcher
        yield test_client


class TestOperationalRoutes:
    """Tests for ping, health and the test alert."""

    def test_ping(self, client):
        response = client.get("/ping")

        assert response.status_code == 200
        body = response.json()
        assert body["pong"] is True
        assert isinstance(body["ts"], int)

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["service"] == "payment-alerts"

    def test_testpayment_defaults(self, client):
        response = client.get("/testpayment")

        assert response.status_code == 200
        assert response.json() == {"sent": True}
        text = client.dispatcher.messages[0]
        assert "Payment received (TEST)" in text
        assert "Test Buyer" in text
        assert "test@example.com" in text
        assert "20.00 USD" in text
        assert "<b>ID:</b> TEST-" in text

    def test_testpayment_query_parameters(self, client):
        response = client.get(
            "/testpayment",
            params={
                "name": "Bo",
                "email": "bo@example.com",
                "plan": "Lite",
                "amount": "7.5",
                "currency": "EUR",
            },
        )

        assert response.json() == {"sent": True}
        text = client.dispatcher.messages[0]
        assert "Bo" in text
        assert "Lite" in text
        assert "7.50 EUR" in text

    def test_testpayment_bad_amount_is_server_error(self, client):
        response = client.get("/testpayment", params={"amount": "abc"})

        assert response.status_code == 500
        assert "error" in response.json()
        assert client.dispatcher.messages == []

    def test_testpayment_reports_unsent(self, client):
        client.dispatcher.succeed = False

        response = client.get("/testpayment")

        assert response.json() == {"sent": False}


class TestEventRoutes:
    """Tests for inbound platform events."""

    def test_invoice_event_is_delivered(self, client, invoice_event):
        response = client.post("/events/invoice-paid", json=invoice_event)

        assert response.status_code == 200
        assert response.json()["status"] == "delivered"
        assert client.dispatcher.alerts[0].id == "inv-1001"

    def test_purchase_event_is_suppressed(self, client):
        response = client.post("/events/plan-purchased", json={"order": {"id": "ord-3"}})

        assert response.status_code == 200
        assert response.json()["status"] == "skipped"
        assert client.dispatcher.alerts == []

    def test_malformed_payload_is_acknowledged(self, client):
        response = client.post(
            "/events/checkout-order-paid",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "event": "checkout-order-paid",
            "status": "failed",
            "reason": "invalid_json",
        }
        assert client.dispatcher.alerts == []

    def test_unknown_event(self, client):
        response = client.post("/events/refund-issued", json={})

        assert response.status_code == 404


class TestSettings:
    """Tests for configuration parsing."""

    def test_policy_defaults_suppress_and_require(self):
        policy = AlertPolicy.from_settings(Settings(_env_file=None))

        assert policy.suppress_plan_purchases is True
        assert policy.require_email_for_renewals is True

    def test_policy_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_ALERTS_SUPPRESS_PLAN_PURCHASES", "false")

        policy = AlertPolicy.from_settings(Settings(_env_file=None))

        assert policy.suppress_plan_purchases is False

    def test_log_level_is_validated(self):
        with pytest.raises(ValueError):
            Settings(log_level="LOUD", _env_file=None)

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_only_alerting_settings_are_declared(self):
        assert "debug" not in Settings.model_fields
