"""FastAPI application entry point for payment alerts."""

import logging
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from payment_alerts.clients import HttpDirectoryClient, HttpOrderClient, SettingsSecretStore
from payment_alerts.config import AlertPolicy, Settings, settings
from payment_alerts.core import DispositionStatus, EventResult, PaymentAlert
from payment_alerts.dispatch import AlertDispatcher, render_alert
from payment_alerts.handlers import HandlerRegistry, build_registry
from payment_alerts.resolvers import BuyerResolver

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_services(
    client: httpx.AsyncClient, config: Settings
) -> tuple[AlertDispatcher, HandlerRegistry]:
    """Wire the dispatcher and event handlers onto one HTTP client."""
    dispatcher = AlertDispatcher(
        client,
        SettingsSecretStore(config),
        site_label=config.site_label,
        api_base=config.telegram_api_base,
    )
    registry = build_registry(
        buyers=BuyerResolver(HttpDirectoryClient(client, config.directory_service_url)),
        dispatcher=dispatcher,
        orders=HttpOrderClient(client, config.order_service_url),
        policy=AlertPolicy.from_settings(config),
    )
    return dispatcher, registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    - Open the shared HTTP client and wire handlers on startup
    - Close the client on shutdown
    """
    logger.info("Starting Payment Alerts...")
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        if getattr(app.state, "registry", None) is None:
            app.state.dispatcher, app.state.registry = build_services(client, settings)
        logger.info(
            "Payment Alerts started (events: %s)", ", ".join(app.state.registry.event_names)
        )

        yield

        logger.info("Shutting down Payment Alerts...")
    logger.info("Payment Alerts shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Payment Alerts",
        description="Normalizes payment webhook events into Telegram payment alerts",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {
            "status": "healthy",
            "service": "payment-alerts",
            "telegram_configured": bool(
                settings.telegram_bot_token.get_secret_value() and settings.telegram_chat_id
            ),
        }

    @app.get("/ping")
    async def ping():
        """Route registration check."""
        return {"pong": True, "ts": int(time.time() * 1000)}

    @app.get("/testpayment")
    async def test_payment(
        request: Request,
        name: str = "Test Buyer",
        email: str = "test@example.com",
        plan: str = "Test Plan",
        amount: str = "20",
        currency: str = "USD",
    ):
        """Send a synthetic alert without a real payment."""
        dispatcher: AlertDispatcher = request.app.state.dispatcher
        try:
            alert = PaymentAlert(
                source="TEST",
                name=name,
                email=email,
                plan=plan,
                amount=float(amount),
                currency=currency,
                id=f"TEST-{int(time.time() * 1000)}",
            )
            sent = await dispatcher.send_message(render_alert(alert, dispatcher.site_label))
        except Exception as e:
            logger.error("testpayment error: %s", e, exc_info=True)
            return JSONResponse(status_code=500, content={"error": str(e)})
        return {"sent": sent}

    @app.post("/events/{event_name}", response_model=EventResult)
    async def receive_event(event_name: str, request: Request) -> EventResult:
        """
        Receive one platform event.

        Always acknowledges known events; the outcome is reported for
        observability only.
        """
        registry: HandlerRegistry = request.app.state.registry
        handler = registry.get(event_name)
        if handler is None:
            raise HTTPException(status_code=404, detail=f"Unknown event: {event_name}")

        try:
            event = await request.json()
        except ValueError as e:
            logger.warning("Invalid JSON payload for %s: %s", event_name, e)
            return EventResult(
                event=event_name, status=DispositionStatus.FAILED, reason="invalid_json"
            )

        disposition = await handler.handle(event)
        return EventResult(event=event_name, status=disposition.status, reason=disposition.reason)

    return app


app = create_app()
