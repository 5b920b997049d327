"""
Shared fixtures.

Every test builds its own app with an in-memory provider client, so no test
talks to Resend.
"""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock

# Set env vars before anything imports notifier.main (it builds a module-level app)
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("EMAIL_DOMAIN", "example.com")
os.environ.setdefault("AUTH_HEADER_KEY", "test-secret")

from fastapi.testclient import TestClient

from notifier.config import Settings

TEST_SECRET = "test-secret"


@pytest.fixture()
def settings():
    return Settings(
        resend_api_key="re_test_key",
        email_domain="example.com",
        auth_secret=TEST_SECRET,
    )


@pytest.fixture()
def email_client():
    """Provider client double; tests set email_client.send.return_value / side_effect."""
    mock = MagicMock()
    mock.send = AsyncMock(return_value={"data": {"id": "abc123"}, "error": None})
    return mock


@pytest.fixture()
def client(settings, email_client):
    """Return a TestClient for an app wired to the fake provider client."""
    from notifier.main import create_app
    app = create_app(settings, email_client=email_client)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def auth_headers():
    return {"auth-secret-key": TEST_SECRET}
