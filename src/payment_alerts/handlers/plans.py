"""Handlers for pricing-plan orders: purchases and renewal cycles."""

import logging
from typing import Any

from ..clients import OrderService
from ..config import AlertPolicy
from ..core import PLACEHOLDER, Disposition, PaymentAlert
from ..resolvers import BuyerResolver, first_of, get_amount_from_order
from .base import Dispatcher, EventHandler

logger = logging.getLogger(__name__)

ORDER_ID_PATHS = ("orderId", "order.id", "id")
PURCHASE_ORDER_ID_PATHS = ("order.id", "orderId", "id")
PLAN_NAME_PATHS = ("plan.name", "planName", "plan.title", "plan.planName")


def get_plan_name(order: dict[str, Any]) -> Any:
    return first_of(order, PLAN_NAME_PATHS, PLACEHOLDER)


class PlanOrderHandler(EventHandler):
    """Builds an alert from a pricing-plan order, fetching it when needed."""

    source = "Pricing Plans"

    def __init__(
        self,
        buyers: BuyerResolver,
        dispatcher: Dispatcher,
        orders: OrderService,
        policy: AlertPolicy | None = None,
    ):
        super().__init__(buyers, dispatcher, policy)
        self.orders = orders

    async def process(self, event: dict[str, Any]) -> Disposition:
        return await self.alert_for_order(event, require_email=False)

    async def alert_for_order(self, event: dict[str, Any], require_email: bool) -> Disposition:
        order_id = first_of(event, ORDER_ID_PATHS)
        order = await self.load_order(event, order_id)

        buyer = await self.buyers.resolve(order.get("buyer") or event.get("buyer") or {})
        money = get_amount_from_order(order)

        if require_email and not (buyer.has_email and money.amount is not None):
            return self.skip(
                "Skipping %s alert for order %s (requires email + amount)", self.source, order_id
            )

        alert = PaymentAlert(
            source=self.source,
            name=buyer.name,
            email=buyer.email,
            plan=get_plan_name(order),
            amount=money.amount,
            currency=money.currency,
            id=order_id or order.get("id"),
        )
        return await self.dispatcher.alert_payment(alert)

    async def load_order(self, event: dict[str, Any], order_id: Any) -> dict[str, Any]:
        order = event.get("order")
        if isinstance(order, dict) and order:
            return order
        if not order_id:
            return {}

        try:
            return await self.orders.get_order(str(order_id)) or {}
        except Exception as e:
            logger.warning("Order lookup for %s failed: %s", order_id, e)
            return {}


class RenewalHandler(PlanOrderHandler):
    """Subscription auto-renewal: a new billing cycle started."""

    event_name = "subscription-renewal-cycle-started"
    source = "Pricing Plans (Renewal)"

    async def process(self, event: dict[str, Any]) -> Disposition:
        return await self.alert_for_order(
            event, require_email=self.policy.require_email_for_renewals
        )


class PurchaseHandler(PlanOrderHandler):
    """
    One-time plan purchases.

    Suppressed by default; the invoice, checkout and pay alerts already
    cover these payments.
    """

    event_name = "purchase-completed"
    source = "Pricing Plans (Purchase)"

    async def process(self, event: dict[str, Any]) -> Disposition:
        if self.policy.suppress_plan_purchases:
            order_id = first_of(event, PURCHASE_ORDER_ID_PATHS)
            return self.skip("Suppressed Pricing Plans purchase alert for order %s", order_id)
        return await super().process(event)
