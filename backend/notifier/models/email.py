"""
Pydantic models for the send endpoints.

Models:
  SendEmailRequest   inbound JSON body for POST /email/send and /notification/send
  SendEmailResponse  uniform JSON body returned to the caller
  OutboundMessage    fully-qualified message handed to the provider adapter
"""

from typing import Optional

from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("from", "to", "subject", "html")
MISSING_FIELDS_MESSAGE = "Missing required fields: from, to, subject, html"


class SendEmailRequest(BaseModel):
    """
    Inbound send request.

    Every field is optional at the schema level so that an incomplete body
    reaches the handler and gets the fixed 400 message rather than FastAPI's
    default 422 validation error. ``from`` is the sender local-part only; the
    domain is appended server-side.
    """
    model_config = {"extra": "ignore", "populate_by_name": True}

    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    subject: Optional[str] = None
    html: Optional[str] = None

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are absent or empty."""
        values = {
            "from": self.from_,
            "to": self.to,
            "subject": self.subject,
            "html": self.html,
        }
        return [name for name in REQUIRED_FIELDS if not values[name]]


class SendEmailResponse(BaseModel):
    """Response body. Unset fields are omitted from the JSON; the send handler may add ``details``."""
    model_config = {"populate_by_name": True}

    success: bool
    message_id: Optional[str] = Field(None, alias="messageId")
    error: Optional[str] = None

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class OutboundMessage(BaseModel):
    """A send request after the sender address has been fully qualified."""
    model_config = {"frozen": True, "populate_by_name": True}

    from_: str = Field(alias="from")
    to: str
    subject: str
    html: str

    def to_payload(self) -> dict:
        """Parameters in the shape Resend's send call expects."""
        return {
            "from": self.from_,
            "to": self.to,
            "subject": self.subject,
            "html": self.html,
        }
