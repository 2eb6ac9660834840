"""Event normalizers, one per upstream event source."""

from .base import EventHandler
from .checkout import CheckoutHandler
from .invoices import InvoiceHandler
from .payments import PaymentUpdateHandler
from .plans import PlanOrderHandler, PurchaseHandler, RenewalHandler
from .registry import EVENT_ALIASES, HandlerRegistry, build_registry

__all__ = [
    "EVENT_ALIASES",
    "CheckoutHandler",
    "EventHandler",
    "HandlerRegistry",
    "InvoiceHandler",
    "PaymentUpdateHandler",
    "PlanOrderHandler",
    "PurchaseHandler",
    "RenewalHandler",
    "build_registry",
]
