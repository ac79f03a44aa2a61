"""Blocking HTTP transport for the DeepL web JSON-RPC endpoint.

``JsonRpcTransport`` is the only place in the relay that makes a network
call.  It sends a payload that has already been serialized by
:class:`~deeplx_relay.translation.builder.RequestBuilder` *as bytes*: the
body must never be re-encoded through ``requests``' ``json=`` parameter,
which would undo the method-field spacing.

Sync vs async
-------------
The transport uses the synchronous ``requests`` library.  The HTTP routes
are ``async`` and hand the whole orchestrator call to Starlette's thread
pool, so a blocking call here does not stall the event loop.

Failure signalling
------------------
``send()`` never returns a partial or empty result: it either returns the
decoded reply object or raises a typed
:mod:`~deeplx_relay.translation.errors` exception.  That includes a payload
that cannot be encoded as UTF-8 (text carrying a lone surrogate).
HTTP 429 gets its own type so the interpreter can report rate limiting
distinctly.  No retries are attempted; repeated calls after a 429 only
extend the backend's block.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from deeplx_relay.translation.config import BackendConfig
from deeplx_relay.translation.errors import (
    BackendHTTPError,
    BackendRateLimitedError,
    BackendResponseError,
    BackendTransportError,
)
from deeplx_relay.translation.models import SESSION_COOKIE

logger = logging.getLogger(__name__)


class JsonRpcTransport:
    """Posts serialized JSON-RPC payloads and returns the decoded reply.

    Attributes:
        _config: Frozen endpoint / timeout / proxy settings.
    """

    def __init__(self, config: BackendConfig) -> None:
        self._config = config

    @property
    def config(self) -> BackendConfig:
        return self._config

    def build_headers(self, dl_session: str = "") -> dict[str, str]:
        """Minimal header set; adds the session cookie when one is given."""
        headers = {"Content-Type": "application/json"}
        if dl_session:
            headers["Cookie"] = f"{SESSION_COOKIE}={dl_session}"
        return headers

    def send(self, payload: str, dl_session: str = "") -> dict[str, Any]:
        """POST ``payload`` and return the parsed JSON object.

        Args:
            payload:    Final serialized body from the builder.
            dl_session: Pro session cookie value, ``""`` for free mode.

        Returns:
            The backend's reply as a dict.

        Raises:
            BackendRateLimitedError: Backend answered 429.
            BackendHTTPError:        Any other non-2xx status.
            BackendTransportError:   Timeout, connection, or proxy failure,
                                     or a payload that is not valid UTF-8.
            BackendResponseError:    2xx reply whose body is not a JSON object.
        """
        try:
            body = payload.encode("utf-8")
        except UnicodeEncodeError as exc:
            logger.warning("JsonRpcTransport: payload is not encodable as UTF-8: %s", exc)
            raise BackendTransportError(str(exc), cause=exc) from exc

        try:
            response = requests.post(
                self._config.endpoint,
                data=body,
                headers=self.build_headers(dl_session),
                proxies=self._config.proxies,
                timeout=self._config.timeout_seconds,
            )
        except requests.exceptions.Timeout as exc:
            logger.warning(
                "JsonRpcTransport: request timed out after %.1fs (endpoint=%s)",
                self._config.timeout_seconds,
                self._config.endpoint,
            )
            raise BackendTransportError(
                f"timeout of {self._config.timeout_seconds:g}s exceeded", cause=exc
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            logger.warning("JsonRpcTransport: cannot connect to %s", self._config.endpoint)
            raise BackendTransportError(str(exc) or "Connection error", cause=exc) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("JsonRpcTransport: request failed: %s", exc)
            raise BackendTransportError(str(exc) or "Request failed", cause=exc) from exc

        if response.status_code == 429:
            logger.warning("JsonRpcTransport: backend rate limit hit (HTTP 429)")
            raise BackendRateLimitedError()

        if not 200 <= response.status_code < 300:
            logger.warning(
                "JsonRpcTransport: backend answered HTTP %d", response.status_code
            )
            raise BackendHTTPError(response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("JsonRpcTransport: reply body is not valid JSON")
            raise BackendResponseError("Invalid JSON in backend response") from exc

        if not isinstance(data, dict):
            raise BackendResponseError("Unexpected backend response shape")
        return data
