"""Core models and exceptions."""

from .base_models import (
    PLACEHOLDER,
    Disposition,
    DispositionStatus,
    EventResult,
    MoneyResult,
    PaymentAlert,
    ResolvedBuyer,
)
from .exceptions import (
    DeliveryError,
    LookupFailedError,
    PaymentAlertsError,
    SecretNotFoundError,
)

__all__ = [
    "PLACEHOLDER",
    "Disposition",
    "DispositionStatus",
    "EventResult",
    "MoneyResult",
    "PaymentAlert",
    "ResolvedBuyer",
    "DeliveryError",
    "LookupFailedError",
    "PaymentAlertsError",
    "SecretNotFoundError",
]
