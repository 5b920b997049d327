"""
Resend provider client adapter.

Builds the outbound message (sender local-part + configured domain) and
performs exactly one send call per request. The adapter does not interpret
the provider's answer beyond wrapping it in a ``{"data", "error"}`` envelope;
classification is done by services.response_normalizer.

The Resend Python SDK is synchronous, so the call runs in a worker thread
and is bounded by Settings.provider_timeout. A call that times out is
abandoned, not interrupted.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import resend
from resend.exceptions import ResendError

from notifier.config import Settings
from notifier.models.email import OutboundMessage, SendEmailRequest

logger = logging.getLogger(__name__)


class EmailTransportError(Exception):
    """The provider call itself failed (network, timeout, unexpected exception)."""


def build_sender_address(local_part: str, domain: str) -> str:
    """Join a local-part and a domain with '@'. No syntax validation."""
    return f"{local_part}@{domain}"


def build_outbound_message(request: SendEmailRequest, domain: str) -> OutboundMessage:
    return OutboundMessage(
        from_=build_sender_address(request.from_, domain),
        to=request.to,
        subject=request.subject,
        html=request.html,
    )


def _error_envelope(exc: ResendError) -> dict:
    return {
        "data": None,
        "error": {
            "message": getattr(exc, "message", None) or str(exc),
            "name": getattr(exc, "error_type", None),
            "statusCode": getattr(exc, "code", None),
        },
    }


class ResendEmailClient:
    """
    Sends one message through the Resend API and returns the raw envelope.

    The SDK reads its key from the module-level ``resend.api_key``. The client
    keeps its own key and assigns it right before each send, so building a
    second client does not change the key the first one uses. Clients with
    different keys must still not send concurrently in one process.
    """

    def __init__(self, settings: Settings):
        self.timeout = settings.provider_timeout
        self._api_key = settings.resend_api_key

    def _send_blocking(self, params: dict) -> dict:
        resend.api_key = self._api_key
        try:
            response = resend.Emails.send(params)
        except ResendError as exc:
            return _error_envelope(exc)

        data: Any = dict(response) if isinstance(response, Mapping) else response
        return {"data": data, "error": None}

    async def send(self, message: OutboundMessage) -> dict:
        """
        Send ``message`` and return ``{"data": ..., "error": ...}``.

        Raises:
            EmailTransportError: the call timed out or failed before the
                provider produced an answer.
        """
        logger.info(
            f"Sending email from {message.from_} to {message.to} "
            f"(subject: {message.subject!r})"
        )
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._send_blocking, message.to_payload()),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise EmailTransportError(
                f"Email provider did not respond within {self.timeout:g}s"
            ) from exc
        except Exception as exc:
            raise EmailTransportError(str(exc) or exc.__class__.__name__) from exc
