"""Amount and currency reconciliation across payload shapes."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..core import MoneyResult
from .fields import first_of, get_path, is_number

PAYMENT_HISTORY_KEYS = ("payments", "paymentHistory")

PAYMENT_ENTRY_AMOUNT_PATHS = ("amount.amount", "amount.value", "amount")
PAYMENT_ENTRY_CURRENCY_PATHS = (
    "amount.currency",
    "amount.currencyCode",
    "currency",
    "currencyCode",
)


@dataclass(frozen=True)
class AmountCandidate:
    """One place an invoice may carry its paid total."""

    path: str
    # "object" reads <path>.amount / <path>.value, "scalar" reads <path> itself
    shape: str = "object"

    @property
    def amount_paths(self) -> tuple[str, ...]:
        if self.shape == "scalar":
            return (self.path,)
        return (f"{self.path}.amount", f"{self.path}.value")

    @property
    def currency_paths(self) -> tuple[str, ...]:
        if self.shape == "scalar":
            return ()
        return (f"{self.path}.currency", f"{self.path}.value.currency")


# Ordered by precedence; different invoice producers emit different shapes
INVOICE_AMOUNT_CANDIDATES = (
    AmountCandidate("paidAmount"),
    AmountCandidate("amountPaid"),
    AmountCandidate("totalAmount"),
    AmountCandidate("grandTotal"),
    AmountCandidate("total"),
    AmountCandidate("amount"),
    AmountCandidate("amount", shape="scalar"),
    AmountCandidate("totals.total"),
    AmountCandidate("toPay"),
    AmountCandidate("amountDue"),
)

EVENT_PAYMENT_AMOUNT_PATHS = (
    "payment.amount.amount",
    "payment.amount.value",
    "payment.amount",
)
EVENT_PAYMENT_CURRENCY_PATHS = ("payment.amount.currency", "payment.currency")

INVOICE_CURRENCY_PATHS = ("currency", "currencyCode", "totals.currency")


def coerce_amount(value: Any) -> Any:
    """Parse numeric strings such as ``"30.00"``; anything else is returned as is."""
    if not isinstance(value, str):
        return value
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def sum_payments(record: Mapping[str, Any]) -> MoneyResult:
    """
    Total a payment-history list.

    Non-numeric entries count as zero; numeric strings are parsed.
    A zero total is treated as no signal.

    Returns:
        MoneyResult with the summed amount and first currency seen
    """
    entries = first_of(record, PAYMENT_HISTORY_KEYS, [])
    if not isinstance(entries, list) or not entries:
        return MoneyResult(amount=None, currency=None)

    total = 0
    currency = None
    for entry in entries:
        # First present shape wins even if it is not a number
        amounts = (get_path(entry, path) for path in PAYMENT_ENTRY_AMOUNT_PATHS)
        amount = coerce_amount(next((a for a in amounts if a is not None), 0))
        if is_number(amount):
            total += amount
        currency = currency or first_of(entry, PAYMENT_ENTRY_CURRENCY_PATHS)

    return MoneyResult(amount=total or None, currency=currency)


def get_amount_from_order(order: Mapping[str, Any]) -> MoneyResult:
    """Extract the total of a subscription order."""
    pricing = order.get("pricing") or order.get("priceDetails") or {}
    total = coerce_amount(
        pricing.get("totalPrice")
        or pricing.get("total")
        or order.get("price")
        or order.get("amount")
    )

    currency = None
    if isinstance(total, Mapping):
        currency = total.get("currency")
    currency = currency or pricing.get("currency") or order.get("currency")

    if is_number(total):
        amount = total
    elif isinstance(total, Mapping):
        amount = coerce_amount(total.get("amount"))
        if not is_number(amount):
            amount = coerce_amount(total.get("value"))
    else:
        amount = None

    return MoneyResult(amount=amount, currency=currency)


def get_amount_from_invoice(
    invoice: Mapping[str, Any],
    event: Mapping[str, Any] | None = None,
) -> MoneyResult:
    """
    Reconcile an invoice's paid amount.

    Tries the direct total fields first, then the summed payment history,
    then the payment attached to the enclosing event. Currency falls back to
    the invoice-level currency fields.

    Args:
        invoice: Invoice payload
        event: Enclosing event, consulted for a ``payment`` sub-object

    Returns:
        MoneyResult, amount None if nothing usable was found
    """
    amount = _first_amount(invoice)
    currency = first_of(
        invoice,
        [p for c in INVOICE_AMOUNT_CANDIDATES for p in c.currency_paths],
    )

    if amount is None:
        summed = sum_payments(invoice)
        amount = summed.amount
        currency = currency or summed.currency

    if amount is None and event is not None:
        amount = coerce_amount(first_of(event, EVENT_PAYMENT_AMOUNT_PATHS))
        currency = currency or first_of(event, EVENT_PAYMENT_CURRENCY_PATHS)

    currency = currency or first_of(invoice, INVOICE_CURRENCY_PATHS)
    return MoneyResult(amount=amount, currency=currency)


def _first_amount(invoice: Mapping[str, Any]) -> Any | None:
    for candidate in INVOICE_AMOUNT_CANDIDATES:
        value = coerce_amount(first_of(invoice, candidate.amount_paths))
        if value is None:
            continue
        if candidate.shape == "scalar" and not is_number(value):
            continue
        return value
    return None
