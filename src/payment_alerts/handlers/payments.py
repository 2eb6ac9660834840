"""Handler for generic payment status updates."""

import re
from typing import Any

from ..core import PLACEHOLDER, Disposition, PaymentAlert
from ..resolvers import coerce_amount
from .base import EventHandler

UNSUCCESSFUL_STATUS = re.compile(r"fail|cancel")


class PaymentUpdateHandler(EventHandler):
    """Alerts on successful payment status updates from the pay API."""

    event_name = "generic-payment-status-update"

    async def process(self, event: dict[str, Any]) -> Disposition:
        raw_status = event.get("status") or ""
        status = str(raw_status).lower()
        if not status or UNSUCCESSFUL_STATUS.search(status):
            return self.skip("Skipping pay API alert for status %r", raw_status)

        payment = event.get("payment")
        if not isinstance(payment, dict):
            payment = {}
        buyer = await self.buyers.resolve(payment.get("userInfo") or payment.get("buyer") or {})

        alert = PaymentAlert(
            source=f"Pay API: {raw_status or 'Successful'}",
            name=buyer.name,
            email=buyer.email,
            plan=PLACEHOLDER,
            amount=coerce_amount(payment.get("amount") or payment.get("price")),
            currency=payment.get("currency"),
            id=payment.get("id") or payment.get("paymentId"),
        )
        return await self.dispatcher.alert_payment(alert)
