"""Handler for paid invoices."""

import json
import logging
from typing import Any

from ..core import PLACEHOLDER, Disposition, PaymentAlert
from ..resolvers import first_of, get_amount_from_invoice, name_from_email
from .base import EventHandler

logger = logging.getLogger(__name__)

INVOICE_ID_PATHS = ("id", "_id", "number", "invoiceId", "metadata.id", "invoice.id")
NESTED_ID_KEYS = ("id", "_id", "number")

# Roles an invoice may name its payer under, in precedence order
PAYER_ROLES = ("buyer", "customer", "issuedTo", "payer", "recipient")

INVOICE_TITLE_PATHS = (
    "title",
    "description",
    "memo",
    "subject",
    "lineItems.0.name",
    "lineItems.0.description",
)


def _role_paths(*fields: str) -> list[str]:
    return [f"{role}.{field}" for role in PAYER_ROLES for field in fields]


BUYER_CANDIDATE_PATHS = {
    "firstName": _role_paths("firstName", "name.first"),
    "lastName": _role_paths("lastName", "name.last"),
    "name": _role_paths("name", "fullName"),
    "email": _role_paths("email"),
    "contactId": _role_paths("contactId", "contactID") + ["contactId"],
}


def get_invoice_id(invoice: dict[str, Any]) -> str:
    """Read the invoice id, collapsing an id object to a scalar."""
    raw_id = first_of(invoice, INVOICE_ID_PATHS, "")
    if not isinstance(raw_id, dict):
        return raw_id if isinstance(raw_id, str) else str(raw_id)

    nested = first_of(raw_id, NESTED_ID_KEYS)
    if nested is not None and not isinstance(nested, (dict, list)):
        return str(nested)
    return json.dumps(raw_id)


def get_buyer_candidate(invoice: dict[str, Any]) -> dict[str, Any]:
    """Project the invoice's payer fields onto a single buyer record."""
    candidate = {}
    for field, paths in BUYER_CANDIDATE_PATHS.items():
        value = first_of(invoice, paths)
        if field == "name" and not isinstance(value, str):
            # Structured names are picked up by the firstName/lastName paths
            value = None
        candidate[field] = value
    return candidate


class InvoiceHandler(EventHandler):
    """Invoices marked as paid by the billing system."""

    event_name = "invoice-paid"

    async def process(self, event: dict[str, Any]) -> Disposition:
        invoice = event.get("invoice") or event

        buyer = await self.buyers.resolve(get_buyer_candidate(invoice))
        name = buyer.name
        if buyer.has_email and name in ("", PLACEHOLDER):
            name = name_from_email(buyer.email)

        money = get_amount_from_invoice(invoice, event)

        alert = PaymentAlert(
            source="Invoice",
            name=name,
            email=buyer.email,
            plan=first_of(invoice, INVOICE_TITLE_PATHS, PLACEHOLDER),
            amount=money.amount,
            currency=money.currency,
            id=get_invoice_id(invoice),
        )
        return await self.dispatcher.alert_payment(alert)

    def log_failure(self, error: Exception, event: Any) -> None:
        try:
            payload = json.dumps(event, default=str)
        except (TypeError, ValueError):
            payload = repr(event)
        logger.exception("%s handler error: %s %s", self.event_name, error, payload)
