"""Unit tests for BackendConfig."""

import dataclasses

import pytest

from deeplx_relay.config import DEFAULT_BACKEND_URL, BackendSettings
from deeplx_relay.translation.config import BackendConfig


class TestDefaults:
    def test_default_endpoint(self):
        assert BackendConfig().endpoint == DEFAULT_BACKEND_URL

    def test_default_timeout(self):
        assert BackendConfig().timeout_seconds == 10.0

    def test_no_proxy_by_default(self):
        cfg = BackendConfig()
        assert cfg.proxy == ""
        assert cfg.proxies is None


class TestProxies:
    def test_proxy_mapping_covers_both_schemes(self):
        cfg = BackendConfig(proxy="socks5://127.0.0.1:1080")
        assert cfg.proxies == {
            "http": "socks5://127.0.0.1:1080",
            "https": "socks5://127.0.0.1:1080",
        }


class TestImmutability:
    def test_frozen(self):
        cfg = BackendConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.endpoint = "http://elsewhere"  # type: ignore[misc]


class TestFromSettings:
    def test_copies_values(self):
        settings = BackendSettings(
            endpoint="http://backend.test/jsonrpc",
            timeout_seconds=4,
            proxy="http://proxy.test:8080",
            dl_session="secret",
        )
        cfg = BackendConfig.from_settings(settings)
        assert cfg.endpoint == "http://backend.test/jsonrpc"
        assert cfg.timeout_seconds == 4.0
        assert isinstance(cfg.timeout_seconds, float)
        assert cfg.proxy == "http://proxy.test:8080"

    def test_session_is_not_frozen_in(self):
        cfg = BackendConfig.from_settings(BackendSettings(dl_session="secret"))
        assert not hasattr(cfg, "dl_session")

    def test_empty_endpoint_falls_back_to_default(self):
        cfg = BackendConfig.from_settings(BackendSettings(endpoint=""))
        assert cfg.endpoint == DEFAULT_BACKEND_URL
