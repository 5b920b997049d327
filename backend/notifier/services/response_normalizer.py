"""
Provider response normalizer.

Classifies the raw envelope returned by the provider adapter into exactly one
of three variants:

  Success            ``data.id`` is a non-empty string and no error is set
  ProviderError      the provider explicitly reported a failure
  MalformedResponse  neither of the above (contract violation)

Resend envelope assumptions
---------------------------
The adapter hands over a mapping with two top-level keys:

  data    dict | None  the provider's success body, e.g. {"id": "49a3..."}
  error   dict | None  the provider's error body, e.g.
                         {"message": "domain not verified", "name": "validation_error",
                          "statusCode": 403}

Either key may be missing, null, or of the wrong type. Every lookup below is
guarded, so no input makes normalize() raise.
"""

from dataclasses import dataclass
from typing import Any, Union

FALLBACK_ERROR_MESSAGE = "Email provider reported an error"


@dataclass(frozen=True)
class Success:
    message_id: str


@dataclass(frozen=True)
class ProviderError:
    message: str
    raw: Any = None


@dataclass(frozen=True)
class MalformedResponse:
    raw: Any = None


ProviderResult = Union[Success, ProviderError, MalformedResponse]


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
        return FALLBACK_ERROR_MESSAGE
    text = str(error)
    return text or FALLBACK_ERROR_MESSAGE


def normalize(raw: Any) -> ProviderResult:
    """
    Classify a raw provider envelope.

    Priority:
      1. an explicit, non-null ``error`` field → ProviderError
      2. a ``data`` mapping carrying a non-empty string ``id`` → Success
      3. anything else → MalformedResponse
    """
    if not isinstance(raw, dict):
        return MalformedResponse(raw=raw)

    error = raw.get("error")
    if error is not None:
        return ProviderError(message=_error_message(error), raw=raw)

    data = raw.get("data")
    if isinstance(data, dict):
        message_id = data.get("id")
        if isinstance(message_id, str) and message_id:
            return Success(message_id=message_id)

    return MalformedResponse(raw=raw)
