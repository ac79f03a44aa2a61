"""Backend transport configuration.

``BackendConfig`` is a frozen dataclass derived from the ``[backend]``
section of :class:`~deeplx_relay.config.RelayConfig`.  It is built once
when the app (or a CLI command) starts and never mutated afterwards, so
it is safe to share between concurrent requests.

The configured ``dl_session`` is deliberately *not* part of this object.
The session is a per-call input: ``/translate`` never sends one, and
``/v1/translate`` may take it from a request cookie instead of config.
"""

from __future__ import annotations

from dataclasses import dataclass

from deeplx_relay.config import DEFAULT_BACKEND_URL, BackendSettings


@dataclass(frozen=True)
class BackendConfig:
    """Immutable settings for :class:`~deeplx_relay.translation.transport.JsonRpcTransport`.

    Attributes:
        endpoint:        Full JSON-RPC URL.
        timeout_seconds: Upper bound for one backend round trip.  On expiry
                         the call resolves to a 503 outcome.
        proxy:           Outbound proxy URL applied to both ``http`` and
                         ``https``; ``""`` for a direct connection.
    """

    endpoint: str = DEFAULT_BACKEND_URL
    timeout_seconds: float = 10.0
    proxy: str = ""

    @property
    def proxies(self) -> dict[str, str] | None:
        """``requests``-style proxy mapping, or ``None`` without a proxy."""
        if not self.proxy:
            return None
        return {"http": self.proxy, "https": self.proxy}

    @classmethod
    def from_settings(cls, settings: BackendSettings) -> BackendConfig:
        """Freeze the ``[backend]`` section of the relay config."""
        return cls(
            endpoint=settings.endpoint or DEFAULT_BACKEND_URL,
            timeout_seconds=float(settings.timeout_seconds),
            proxy=settings.proxy,
        )
