"""Configuration management using Pydantic Settings."""

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAYMENT_ALERTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Telegram Configuration
    telegram_bot_token: SecretStr = SecretStr("")
    telegram_chat_id: str = ""
    telegram_api_base: str = "https://api.telegram.org"

    # Label shown on every alert
    site_label: str = "hts20.net"

    # Upstream collaborators
    directory_service_url: str = "http://directory:8080"
    order_service_url: str = "http://pricing-plans:8080"
    http_timeout_seconds: float = 10.0

    # Alert policy
    # Plan purchase pings duplicate the invoice/checkout/pay alerts
    suppress_plan_purchases: bool = True
    # Renewals are only sent with both an email and an amount
    require_email_for_renewals: bool = True

    # Application
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()


class AlertPolicy(BaseModel):
    """Process-wide alerting policy, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    suppress_plan_purchases: bool = True
    require_email_for_renewals: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "AlertPolicy":
        return cls(
            suppress_plan_purchases=settings.suppress_plan_purchases,
            require_email_for_renewals=settings.require_email_for_renewals,
        )


settings = Settings()
