"""Shared handler boundary for inbound payment events."""

import logging
from typing import Any, Protocol

from ..config import AlertPolicy
from ..core import Disposition, PaymentAlert
from ..resolvers import BuyerResolver

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    async def alert_payment(self, alert: PaymentAlert) -> Disposition:
        ...


class EventHandler:
    """
    Base class for event normalizers.

    Subclasses implement ``process``. ``handle`` is the failure boundary:
    nothing raised while normalizing an event escapes to the platform.
    """

    event_name: str = "event"

    def __init__(
        self,
        buyers: BuyerResolver,
        dispatcher: Dispatcher,
        policy: AlertPolicy | None = None,
    ):
        self.buyers = buyers
        self.dispatcher = dispatcher
        self.policy = policy or AlertPolicy()

    async def handle(self, event: dict[str, Any] | None) -> Disposition:
        """Normalize and dispatch one event, never raising."""
        try:
            return await self.process(event if isinstance(event, dict) else {})
        except Exception as e:
            self.log_failure(e, event)
            return Disposition.failed(f"{type(e).__name__}: {e}")

    async def process(self, event: dict[str, Any]) -> Disposition:
        raise NotImplementedError

    def log_failure(self, error: Exception, event: Any) -> None:
        logger.exception("%s handler error: %s", self.event_name, error)

    def skip(self, reason: str, *args: Any) -> Disposition:
        """Log a policy skip and report it."""
        message = reason % args if args else reason
        logger.warning(message)
        return Disposition.skipped(message)
