"""Typed exceptions raised by the backend transport.

The transport signals every failure with one of these, and the
:class:`~deeplx_relay.translation.interpreter.ResponseInterpreter` turns
each one into a :class:`~deeplx_relay.translation.models.TranslationOutcome`.
They never reach an HTTP handler.

Design intent:
    - HTTP 429 is kept distinct from every other status so the caller can
      tell "slow down" apart from "broken".
    - Each exception carries a message that is safe to show to API callers
      verbatim.
"""

from __future__ import annotations

from deeplx_relay.translation.models import MSG_RATE_LIMITED


class BackendError(RuntimeError):
    """Base exception for translation-backend failures."""


class BackendRateLimitedError(BackendError):
    """The backend answered HTTP 429."""

    def __init__(self, message: str = MSG_RATE_LIMITED) -> None:
        super().__init__(message)


class BackendHTTPError(BackendError):
    """The backend answered with a non-2xx status other than 429.

    Args:
        status_code: HTTP status returned by the backend.
    """

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Request failed with status code {status_code}")
        self.status_code = status_code


class BackendTransportError(BackendError):
    """Network-level failure: timeout, refused connection, proxy error."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class BackendResponseError(BackendError):
    """The backend answered 2xx but the body is not a JSON object."""
