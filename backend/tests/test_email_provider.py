"""
Unit tests for the Resend provider client adapter.

resend.Emails.send is patched in every test; nothing leaves the process.
"""

import time
import pytest
from unittest.mock import patch

import resend
from resend.exceptions import ResendError

from notifier.config import Settings
from notifier.models.email import OutboundMessage, SendEmailRequest
from notifier.services.email_provider import (
    EmailTransportError,
    ResendEmailClient,
    build_outbound_message,
    build_sender_address,
)


class FakeResendError(ResendError):
    """ResendError with the attributes the SDK sets, independent of its constructor."""

    def __init__(self, message, error_type="validation_error", code=403):
        Exception.__init__(self, message)
        self.message = message
        self.error_type = error_type
        self.code = code


def _message() -> OutboundMessage:
    return OutboundMessage(
        from_="alerts@example.com",
        to="user@example.org",
        subject="Hello",
        html="<p>Hi</p>",
    )


class TestSenderAddress:

    def test_local_part_and_domain_joined_with_at(self):
        assert build_sender_address("alerts", "example.com") == "alerts@example.com"

    def test_domain_is_not_validated(self):
        assert build_sender_address("alerts", "not a domain") == "alerts@not a domain"

    def test_outbound_message_forwards_fields_unmodified(self):
        request = SendEmailRequest.model_validate(
            {"from": "alerts", "to": "user@example.org", "subject": " Subj ", "html": "<b>x</b>"}
        )
        message = build_outbound_message(request, "example.com")

        assert message.to_payload() == {
            "from": "alerts@example.com",
            "to": "user@example.org",
            "subject": " Subj ",
            "html": "<b>x</b>",
        }


class TestResendEmailClient:

    @pytest.fixture()
    def settings(self):
        return Settings(resend_api_key="re_test_key", email_domain="example.com", provider_timeout=5)

    @pytest.mark.asyncio
    async def test_success_wraps_response_in_data(self, settings):
        client = ResendEmailClient(settings)

        with patch("notifier.services.email_provider.resend.Emails.send") as mock_send:
            mock_send.return_value = {"id": "abc123"}
            raw = await client.send(_message())

        assert raw == {"data": {"id": "abc123"}, "error": None}
        mock_send.assert_called_once_with(_message().to_payload())

    @pytest.mark.asyncio
    async def test_provider_error_returned_as_error_envelope(self, settings):
        client = ResendEmailClient(settings)

        with patch("notifier.services.email_provider.resend.Emails.send") as mock_send:
            mock_send.side_effect = FakeResendError("domain not verified")
            raw = await client.send(_message())

        assert raw["data"] is None
        assert raw["error"] == {
            "message": "domain not verified",
            "name": "validation_error",
            "statusCode": 403,
        }

    @pytest.mark.asyncio
    async def test_network_failure_raises_transport_error(self, settings):
        client = ResendEmailClient(settings)

        with patch("notifier.services.email_provider.resend.Emails.send") as mock_send:
            mock_send.side_effect = ConnectionError("connection refused")

            with pytest.raises(EmailTransportError) as exc_info:
                await client.send(_message())

        assert "connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_slow_provider_raises_transport_error(self):
        client = ResendEmailClient(Settings(resend_api_key="re_test_key", provider_timeout=0.05))

        with patch("notifier.services.email_provider.resend.Emails.send") as mock_send:
            mock_send.side_effect = lambda params: time.sleep(0.5) or {"id": "late"}

            with pytest.raises(EmailTransportError) as exc_info:
                await client.send(_message())

        assert "did not respond" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_api_key_is_handed_to_sdk_at_send_time(self, settings):
        client = ResendEmailClient(settings)
        seen_keys = []

        with patch("notifier.services.email_provider.resend.Emails.send") as mock_send:
            mock_send.side_effect = lambda params: seen_keys.append(resend.api_key) or {"id": "abc123"}
            await client.send(_message())

        assert seen_keys == ["re_test_key"]

    @pytest.mark.asyncio
    async def test_second_client_does_not_replace_first_clients_key(self, settings):
        first = ResendEmailClient(settings)
        ResendEmailClient(Settings(resend_api_key="re_other_key"))
        seen_keys = []

        with patch("notifier.services.email_provider.resend.Emails.send") as mock_send:
            mock_send.side_effect = lambda params: seen_keys.append(resend.api_key) or {"id": "abc123"}
            await first.send(_message())

        assert seen_keys == ["re_test_key"]
