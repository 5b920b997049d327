"""
Process-wide configuration.

Values are read from the environment once at startup (a local .env file is
loaded first via python-dotenv) and collected into an immutable Settings
object. Components receive the Settings instance explicitly instead of
reading os.environ on their own.

Environment variables
---------------------
RESEND_API_KEY            Resend API key used for outbound email.
EMAIL_DOMAIN              Domain appended to the sender local-part.
AUTH_HEADER_KEY           Shared secret expected in the auth-secret-key header.
PORT                      Listen port (default: 3000).
HOST                      Bind address (default: 0.0.0.0).
EMAIL_PROVIDER_TIMEOUT    Upstream send timeout in seconds (default: 10).
LOG_LEVEL                 Logging level name (default: INFO).
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_PROVIDER_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    resend_api_key: str = ""
    email_domain: str = ""
    auth_secret: str = ""
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Secrets stay out of logs and tracebacks
        return (
            f"Settings(email_domain={self.email_domain!r}, port={self.port}, "
            f"host={self.host!r}, provider_timeout={self.provider_timeout}, "
            f"log_level={self.log_level!r})"
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _log_level_env(name: str, default: str) -> str:
    level = (os.getenv(name, "").strip() or default).upper()
    # getLevelName maps known names to their numeric level
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Missing secrets are not fatal here: the app logs a warning at startup and
    the access guard rejects every guarded request until AUTH_HEADER_KEY is
    set. Malformed numeric values and unknown LOG_LEVEL names raise ValueError.
    """
    load_dotenv()

    return Settings(
        resend_api_key=os.getenv("RESEND_API_KEY", "").strip(),
        email_domain=os.getenv("EMAIL_DOMAIN", "").strip(),
        auth_secret=os.getenv("AUTH_HEADER_KEY", ""),
        port=_int_env("PORT", DEFAULT_PORT),
        host=os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0",
        provider_timeout=_float_env("EMAIL_PROVIDER_TIMEOUT", DEFAULT_PROVIDER_TIMEOUT),
        log_level=_log_level_env("LOG_LEVEL", "INFO"),
    )
