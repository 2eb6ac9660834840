"""Field, money and buyer resolution over raw event payloads."""

from .buyer import BuyerResolver, name_from_email, title_case_words
from .fields import first_of, get_path, is_number
from .money import (
    INVOICE_AMOUNT_CANDIDATES,
    AmountCandidate,
    coerce_amount,
    get_amount_from_invoice,
    get_amount_from_order,
    sum_payments,
)

__all__ = [
    "AmountCandidate",
    "BuyerResolver",
    "INVOICE_AMOUNT_CANDIDATES",
    "coerce_amount",
    "first_of",
    "get_amount_from_invoice",
    "get_amount_from_order",
    "get_path",
    "is_number",
    "name_from_email",
    "sum_payments",
    "title_case_words",
]
