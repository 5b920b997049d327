"""
Email send endpoint.

POST /send validates the four required fields, builds the outbound message,
makes one provider call and maps the normalized result to a response:

  Success            200  {"success": true, "messageId": ...}
  ProviderError      500  {"success": false, "error": <provider message>}
  MalformedResponse  500  {"success": false, "error": "Email service returned invalid response", "details": ...}
  transport failure  500  {"success": false, "error": <exception message>}

handle_send() is shared with the notification router.
"""

import json
import logging
import reprlib
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from notifier.models.email import (
    MISSING_FIELDS_MESSAGE,
    SendEmailRequest,
    SendEmailResponse,
)
from notifier.services.email_provider import ResendEmailClient, build_outbound_message
from notifier.services.response_normalizer import (
    MalformedResponse,
    ProviderError,
    Success,
    normalize,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_RESPONSE_MESSAGE = "Email service returned invalid response"

SEND_RESPONSES = {
    200: {
        "description": "Email accepted by the provider",
        "content": {"application/json": {"example": {"success": True, "messageId": "49a3999c-0ce1-4ea6-ab68-afcd6dc2e794"}}},
    },
    400: {"description": "Missing required fields: from, to, subject, html"},
    401: {"description": "Missing or invalid auth-secret-key header"},
    500: {"description": "Provider rejected the send, returned an invalid response, or could not be reached"},
}


def get_email_client(request: Request) -> ResendEmailClient:
    """Return the provider client created at startup."""
    return request.app.state.email_client


def _diagnostic(raw: Any) -> Any:
    """Return ``raw`` if it can be sent as strict JSON, otherwise a bounded repr."""
    try:
        json.dumps(raw, allow_nan=False)
    except (TypeError, ValueError, RecursionError):
        return reprlib.repr(raw)
    return raw


def _respond(status_code: int, body: SendEmailResponse) -> JSONResponse:
    return JSONResponse(body.to_body(), status_code=status_code)


async def handle_send(
    payload: SendEmailRequest,
    client: ResendEmailClient,
    domain: str,
) -> JSONResponse:
    """
    Validate ``payload``, send it once through ``client`` and build the response.

    Never raises: every failure is turned into a JSON body.
    """
    missing = payload.missing_fields()
    if missing:
        logger.info(f"Rejected send request, missing fields: {missing}")
        return JSONResponse({"error": MISSING_FIELDS_MESSAGE}, status_code=400)

    message = build_outbound_message(payload, domain)

    try:
        raw = await client.send(message)
    except Exception as e:
        logger.error(f"Email send to {message.to} failed: {e}")
        return _respond(500, SendEmailResponse(success=False, error=str(e) or e.__class__.__name__))

    result = normalize(raw)

    if isinstance(result, Success):
        logger.info(f"Email sent to {message.to}, message id {result.message_id}")
        return _respond(200, SendEmailResponse(success=True, message_id=result.message_id))

    if isinstance(result, ProviderError):
        logger.warning(f"Provider rejected email to {message.to}: {result.message}")
        return _respond(500, SendEmailResponse(success=False, error=result.message))

    if isinstance(result, MalformedResponse):
        logger.error(f"Provider returned an unexpected response: {reprlib.repr(result.raw)}")
        # details is attached after model_dump so the raw payload is only serialized once
        body = SendEmailResponse(success=False, error=INVALID_RESPONSE_MESSAGE).to_body()
        body["details"] = _diagnostic(result.raw)
        return JSONResponse(body, status_code=500)

    raise TypeError(f"Unhandled provider result: {result!r}")


@router.post("/send", responses=SEND_RESPONSES)
async def send_email(
    payload: SendEmailRequest,
    request: Request,
    client: ResendEmailClient = Depends(get_email_client),
):
    """Send a single transactional email."""
    return await handle_send(payload, client, request.app.state.settings.email_domain)
