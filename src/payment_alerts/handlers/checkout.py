"""Handler for paid e-commerce checkout orders."""

from collections.abc import Mapping
from typing import Any

from ..core import PLACEHOLDER, Disposition, MoneyResult, PaymentAlert
from ..resolvers import coerce_amount, first_of, is_number
from .base import EventHandler

ORDER_TOTAL_PATHS = ("priceSummary.total", "amountPaid", "totals.total")


def get_checkout_total(order: Mapping[str, Any]) -> MoneyResult:
    """Read the paid total of a checkout order."""
    total = coerce_amount(first_of(order, ORDER_TOTAL_PATHS, {}))

    if is_number(total):
        return MoneyResult(amount=total, currency=order.get("currency"))

    if not isinstance(total, Mapping):
        return MoneyResult(amount=None, currency=order.get("currency"))

    amount = total.get("amount")
    if amount is None:
        amount = total.get("value")
    amount = coerce_amount(amount)
    return MoneyResult(amount=amount, currency=total.get("currency") or order.get("currency"))


class CheckoutHandler(EventHandler):
    """Stores and e-commerce orders marked as paid."""

    event_name = "checkout-order-paid"

    async def process(self, event: dict[str, Any]) -> Disposition:
        order = event.get("order") or event
        buyer = await self.buyers.resolve(order.get("buyerInfo") or order.get("buyer") or {})
        money = get_checkout_total(order)

        alert = PaymentAlert(
            source="Stores",
            name=buyer.name,
            email=buyer.email,
            plan=first_of(order, ["cart.lineItems.0.name"], PLACEHOLDER),
            amount=money.amount,
            currency=money.currency,
            id=order.get("id") or order.get("number"),
        )
        return await self.dispatcher.alert_payment(alert)
