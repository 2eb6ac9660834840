"""Payment webhook normalization and Telegram alerting."""
