"""Custom exceptions for the payment alerts service."""


class PaymentAlertsError(Exception):
    """Base exception for payment alert errors."""

    pass


class LookupFailedError(PaymentAlertsError):
    """Raised when a directory or order lookup fails."""

    def __init__(self, message: str, service: str | None = None):
        self.message = message
        self.service = service
        super().__init__(self.message)


class SecretNotFoundError(PaymentAlertsError):
    """Raised when a required secret is not configured."""

    def __init__(self, name: str):
        self.name = name
        self.message = f"Secret {name} is not configured"
        super().__init__(self.message)


class DeliveryError(PaymentAlertsError):
    """Raised when the messaging endpoint rejects an alert."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(self.message)
