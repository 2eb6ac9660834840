"""Pytest fixtures for payment alert tests."""

from typing import Any

import pytest

from payment_alerts.config import AlertPolicy
from payment_alerts.core import Disposition, LookupFailedError, PaymentAlert
from payment_alerts.resolvers import BuyerResolver


class FakeDirectory:
    """In-memory directory service that records its calls."""

    def __init__(
        self,
        by_email: dict[str, dict[str, Any]] | None = None,
        by_id: dict[str, dict[str, Any]] | None = None,
        fail: bool = False,
    ):
        self.by_email = by_email or {}
        self.by_id = by_id or {}
        self.fail = fail
        self.email_queries: list[str] = []
        self.id_queries: list[str] = []

    async def query_by_email(self, email: str) -> dict[str, Any]:
        self.email_queries.append(email)
        if self.fail:
            raise LookupFailedError("directory down", service="directory")
        contact = self.by_email.get(email)
        return {"items": [contact] if contact else []}

    async def get_by_id(self, contact_id: str) -> dict[str, Any]:
        self.id_queries.append(contact_id)
        if self.fail:
            raise LookupFailedError("directory down", service="directory")
        if contact_id not in self.by_id:
            raise LookupFailedError(f"contact {contact_id} not found", service="directory")
        return self.by_id[contact_id]


class FakeOrders:
    """In-memory order service."""

    def __init__(self, orders: dict[str, dict[str, Any]] | None = None):
        self.orders = orders or {}
        self.requested: list[str] = []

    async def get_order(self, order_id: str) -> dict[str, Any]:
        self.requested.append(order_id)
        if order_id not in self.orders:
            raise LookupFailedError(f"order {order_id} not found", service="orders")
        return self.orders[order_id]


class RecordingDispatcher:
    """Dispatcher that keeps alerts instead of sending them."""

    site_label = "test.example"

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.alerts: list[PaymentAlert] = []
        self.messages: list[str] = []

    async def alert_payment(self, alert: PaymentAlert) -> Disposition:
        self.alerts.append(alert)
        if self.succeed:
            return Disposition.delivered(alert)
        return Disposition.failed("delivery failed", alert=alert)

    async def send_message(self, text: str) -> bool:
        self.messages.append(text)
        return self.succeed


@pytest.fixture
def directory() -> FakeDirectory:
    """Directory with one known contact reachable by email and by id."""
    contact = {
        "id": "c-1",
        "info": {"name": {"first": "Jane", "last": "Roe"}},
        "primaryEmail": {"email": "jane.roe@example.com"},
    }
    return FakeDirectory(
        by_email={"jane.roe@example.com": contact},
        by_id={"c-1": contact},
    )


@pytest.fixture
def buyers(directory) -> BuyerResolver:
    return BuyerResolver(directory)


@pytest.fixture
def orders() -> FakeOrders:
    return FakeOrders(
        {
            "ord-42": {
                "id": "ord-42",
                "buyer": {"firstName": "Sam", "lastName": "Lee", "email": "sam@example.com"},
                "plan": {"name": "Gold"},
                "pricing": {"total": {"amount": 49.0, "currency": "EUR"}},
            }
        }
    )


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def policy() -> AlertPolicy:
    """Default production policy."""
    return AlertPolicy()


@pytest.fixture
def renewal_event() -> dict:
    """A renewal cycle event carrying its order inline."""
    return {
        "orderId": "ord-7",
        "order": {
            "id": "ord-7",
            "buyer": {"firstName": "Ada", "lastName": "Byron", "email": "ada@example.com"},
            "plan": {"title": "Pro Monthly"},
            "pricing": {"totalPrice": {"amount": 19.5, "currency": "USD"}},
        },
    }


@pytest.fixture
def invoice_event() -> dict:
    """An invoice paid event with a nested money object."""
    return {
        "invoice": {
            "id": "inv-1001",
            "title": "Consulting, March",
            "customer": {"fullName": "Grace Hopper", "email": "grace@example.com"},
            "totals": {"total": {"amount": 250, "currency": "GBP"}},
        }
    }
