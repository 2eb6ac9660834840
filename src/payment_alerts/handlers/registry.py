"""Maps platform event names to their handlers."""

from ..clients import OrderService
from ..config import AlertPolicy
from ..resolvers import BuyerResolver
from .base import Dispatcher, EventHandler
from .checkout import CheckoutHandler
from .invoices import InvoiceHandler
from .payments import PaymentUpdateHandler
from .plans import PurchaseHandler, RenewalHandler

# Alternate names some platform versions deliver the same events under
EVENT_ALIASES = {
    "plan-purchased": PurchaseHandler.event_name,
    "order-cycle-started": RenewalHandler.event_name,
    "ecom-order-paid": CheckoutHandler.event_name,
}


class HandlerRegistry:
    """Holds one handler per inbound event name."""

    def __init__(self, handlers: list[EventHandler]):
        self._handlers = {handler.event_name: handler for handler in handlers}

    def get(self, event_name: str) -> EventHandler | None:
        name = EVENT_ALIASES.get(event_name, event_name)
        return self._handlers.get(name)

    @property
    def event_names(self) -> list[str]:
        return sorted([*self._handlers, *EVENT_ALIASES])


def build_registry(
    buyers: BuyerResolver,
    dispatcher: Dispatcher,
    orders: OrderService,
    policy: AlertPolicy,
) -> HandlerRegistry:
    """Wire every handler with the shared collaborators."""
    return HandlerRegistry(
        [
            PurchaseHandler(buyers, dispatcher, orders, policy),
            RenewalHandler(buyers, dispatcher, orders, policy),
            PaymentUpdateHandler(buyers, dispatcher, policy),
            CheckoutHandler(buyers, dispatcher, policy),
            InvoiceHandler(buyers, dispatcher, policy),
        ]
    )
