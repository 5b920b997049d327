"""
Notification microservice.
FastAPI application that sends transactional email through Resend.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from notifier.auth import SharedSecretMiddleware
from notifier.config import Settings, load_settings
from notifier.models.email import MISSING_FIELDS_MESSAGE
from notifier.routers import email, notification
from notifier.services.email_provider import ResendEmailClient

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "Notification microservice is running!"


def create_app(
    settings: Optional[Settings] = None,
    email_client: Optional[ResendEmailClient] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    ``settings`` defaults to the environment; ``email_client`` defaults to a
    ResendEmailClient built from those settings. Both end up on ``app.state``
    and are never mutated afterwards.
    """
    settings = settings or load_settings()
    logging.getLogger().setLevel(settings.log_level)

    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY is not set; provider calls will be rejected")
    if not settings.email_domain:
        logger.warning("EMAIL_DOMAIN is not set; sender addresses will be incomplete")

    app = FastAPI(
        title="Notification Service",
        description="Sends transactional email through Resend",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.email_client = email_client if email_client is not None else ResendEmailClient(settings)

    app.add_middleware(SharedSecretMiddleware, secret=settings.auth_secret)

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        # Wrong types and unparseable bodies are the same client error as missing fields
        logger.info(f"Invalid request body on {request.url.path}: {exc.errors()}")
        return JSONResponse({"error": MISSING_FIELDS_MESSAGE}, status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            {"success": False, "error": "Internal server error"},
            status_code=500,
        )

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return ROOT_MESSAGE

    @app.get("/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(email.router, prefix="/email", tags=["email"])
    app.include_router(notification.router, prefix="/notification", tags=["notification"])

    return app


app = create_app()


def run() -> None:
    """Start the service with uvicorn on the configured host and port."""
    settings: Settings = app.state.settings
    logger.info(
        "Notification microservice running at:\n"
        "  Local:   http://localhost:%s",
        settings.port,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
