"""Canonical models shared across all event sources."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

PLACEHOLDER = "—"


@dataclass(frozen=True)
class MoneyResult:
    """Amount and currency reconciled from an event payload."""

    amount: Any = None
    currency: str | None = None


@dataclass(frozen=True)
class ResolvedBuyer:
    """Displayable buyer identity. Both fields are always populated."""

    name: str = PLACEHOLDER
    email: str = PLACEHOLDER

    @property
    def has_email(self) -> bool:
        return bool(self.email) and self.email != PLACEHOLDER


class PaymentAlert(BaseModel):
    """
    Source-agnostic payment alert.

    This is the canonical record every event source is normalized to before
    it is rendered and sent. ``amount`` is usually a number, but raw money
    objects (``{"value": ..., "currency": ...}``) are passed through for the
    formatter to interpret.
    """

    source: str = Field(..., description="Human-readable event source label")
    name: str = Field(default=PLACEHOLDER, description="Buyer display name")
    email: str = Field(default=PLACEHOLDER, description="Buyer email")
    plan: str = Field(default=PLACEHOLDER, description="Plan, product or invoice title")
    amount: Any = Field(default=None, description="Paid amount or raw money object")
    currency: str | None = Field(default=None, description="Currency code")
    id: str | None = Field(default=None, description="Order, payment or invoice id")

    @field_validator("name", "email", "plan", mode="before")
    @classmethod
    def coerce_display_text(cls, value: Any) -> str:
        """Blank values become the placeholder, non-strings their JSON text."""
        if value is None or value == "":
            return PLACEHOLDER
        return value if isinstance(value, str) else _to_text(value)

    @field_validator("currency", "id", mode="before")
    @classmethod
    def coerce_optional_text(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else _to_text(value)


def _to_text(value: Any) -> str:
    try:
        return json.dumps(value, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


class DispositionStatus(str, Enum):
    """Outcome of handling one event."""

    DELIVERED = "delivered"
    SKIPPED = "skipped"
    FAILED = "failed"


class EventResult(BaseModel):
    """Result returned from the inbound event endpoint."""

    event: str
    status: DispositionStatus
    reason: str | None = None


@dataclass(frozen=True)
class Disposition:
    """Result of handling one event."""

    status: DispositionStatus
    reason: str | None = None
    alert: PaymentAlert | None = None

    @classmethod
    def delivered(cls, alert: PaymentAlert) -> "Disposition":
        return cls(status=DispositionStatus.DELIVERED, alert=alert)

    @classmethod
    def skipped(cls, reason: str, alert: PaymentAlert | None = None) -> "Disposition":
        return cls(status=DispositionStatus.SKIPPED, reason=reason, alert=alert)

    @classmethod
    def failed(cls, reason: str, alert: PaymentAlert | None = None) -> "Disposition":
        return cls(status=DispositionStatus.FAILED, reason=reason, alert=alert)

    @property
    def is_delivered(self) -> bool:
        return self.status is DispositionStatus.DELIVERED
