"""
Notification send endpoint.

Same request body, validation and response contract as POST /email/send;
notifications are delivered as email through the same provider client.
"""

import logging

from fastapi import APIRouter, Depends, Request

from notifier.models.email import SendEmailRequest
from notifier.routers.email import SEND_RESPONSES, get_email_client, handle_send
from notifier.services.email_provider import ResendEmailClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/send", responses=SEND_RESPONSES)
async def send_notification(
    payload: SendEmailRequest,
    request: Request,
    client: ResendEmailClient = Depends(get_email_client),
):
    """Send a notification email."""
    logger.info(f"Notification requested for {payload.to}")
    return await handle_send(payload, client, request.app.state.settings.email_domain)
