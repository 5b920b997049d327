"""
Shared-secret access guard.

Every request except the exempt liveness paths must carry the configured
secret in the ``auth-secret-key`` header. The check runs as middleware so a
rejected request never reaches routing or body parsing.

The comparison uses hmac.compare_digest so response timing does not reveal
how much of the secret matched.
"""

import hmac
import logging
from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

AUTH_HEADER = "auth-secret-key"
EXEMPT_PATHS = frozenset({"/", "/health"})
UNAUTHORIZED_BODY = {"error": "Unauthorized"}


def is_authorized(provided: Optional[str], expected: str) -> bool:
    """
    Return True when ``provided`` matches ``expected`` exactly.

    An empty ``expected`` secret never authorizes anything.
    """
    if not expected or provided is None:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


class SharedSecretMiddleware(BaseHTTPMiddleware):
    """Reject requests on guarded paths that lack the shared secret."""

    def __init__(self, app, secret: str, exempt_paths: Iterable[str] = EXEMPT_PATHS):
        super().__init__(app)
        self.secret = secret
        self.exempt_paths = frozenset(exempt_paths)
        if not secret:
            logger.warning(
                "No shared secret configured (AUTH_HEADER_KEY); all guarded "
                "requests will be rejected"
            )

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        if not is_authorized(request.headers.get(AUTH_HEADER), self.secret):
            logger.warning(
                f"Rejected unauthorized {request.method} {request.url.path}"
            )
            return JSONResponse(UNAUTHORIZED_BODY, status_code=401)

        return await call_next(request)
