"""
Shared pytest fixtures for the relay test suite.

This module provides fixtures that are automatically available to all test files:
- A relay configuration with a known access token
- A stub transport that records payloads instead of touching the network
- An orchestrator with a fixed id and clock
- FastAPI TestClient instances wired to the stub transport

No fixture here performs real network I/O.
"""

import pytest
from fastapi.testclient import TestClient

from deeplx_relay.api.server import create_app
from deeplx_relay.config import RelayConfig
from deeplx_relay.translation.service import RelayOrchestrator
from tests.constants import TEST_TOKEN
from tests.helpers import StubTransport, make_builder

# Environment variables read by load_config(); cleared so a developer's
# shell cannot leak into config tests.
RELAY_ENV_VARS = (
    "IP",
    "PORT",
    "TOKEN",
    "DL_SESSION",
    "PROXY",
    "DEEPLX_HOST",
    "DEEPLX_PORT",
    "DEEPLX_CORS_ORIGINS",
    "DEEPLX_BACKEND_URL",
    "DEEPLX_TIMEOUT_SECONDS",
    "DEEPLX_LOG_LEVEL",
    "DEEPLX_LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every relay environment variable for the duration of a test."""
    for name in RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def relay_config() -> RelayConfig:
    """Relay configuration with a known token and no default session."""
    cfg = RelayConfig()
    cfg.security.token = TEST_TOKEN
    return cfg


@pytest.fixture
def stub_transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def orchestrator(stub_transport: StubTransport) -> RelayOrchestrator:
    """Orchestrator with a fixed id/clock and the stub transport."""
    return RelayOrchestrator(transport=stub_transport, builder=make_builder())


@pytest.fixture
def test_client(relay_config: RelayConfig, orchestrator: RelayOrchestrator) -> TestClient:
    """
    Create a FastAPI TestClient for API endpoint testing.

    Example:
        def test_root(test_client):
            assert test_client.get("/").status_code == 200
    """
    return TestClient(create_app(relay_config, orchestrator))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TEST_TOKEN}"}
