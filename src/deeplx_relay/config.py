"""
Relay configuration management.

This module handles loading and accessing relay configuration from multiple
sources with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The RelayConfig
dataclass provides typed access to all settings. Nothing mutates it after the
server has started; request handlers only ever read it.

Usage:
    from deeplx_relay.config import config

    print(config.server.host)
    print(config.backend.endpoint)
    print(config.auth_enabled)

Environment Variable Mapping:
    IP / DEEPLX_HOST          -> server.host
    PORT / DEEPLX_PORT        -> server.port
    TOKEN                     -> security.token
    DEEPLX_CORS_ORIGINS       -> security.cors_origins
    DL_SESSION                -> backend.dl_session
    PROXY                     -> backend.proxy
    DEEPLX_BACKEND_URL        -> backend.endpoint
    DEEPLX_TIMEOUT_SECONDS    -> backend.timeout_seconds
    DEEPLX_LOG_LEVEL          -> logging.level
    DEEPLX_LOG_FORMAT         -> logging.format

The unprefixed names (IP, PORT, TOKEN, DL_SESSION, PROXY) are kept for
compatibility with existing DeepLX deployments.
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"

DEFAULT_BACKEND_URL = "https://www2.deepl.com/jsonrpc"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 1188


@dataclass
class SecuritySettings:
    """Access-token and CORS configuration."""

    token: str = ""
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class BackendSettings:
    """Upstream translation backend configuration."""

    endpoint: str = DEFAULT_BACKEND_URL
    timeout_seconds: float = 10.0
    proxy: str = ""
    dl_session: str = ""


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class RelayConfig:
    """
    Complete relay configuration.

    This is the main configuration object that aggregates all settings sections.
    Access via the module-level `config` singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    backend: BackendSettings = field(default_factory=BackendSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def auth_enabled(self) -> bool:
        """True when an access token is configured for the translate routes."""
        return bool(self.security.token)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to list, stripping whitespace."""
    if not value or value.strip() == "":
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_from_ini(parser: configparser.ConfigParser, cfg: RelayConfig) -> None:
    """Load configuration from parsed INI file into RelayConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "token"):
            cfg.security.token = parser.get("security", "token")
        if parser.has_option("security", "cors_origins"):
            cfg.security.cors_origins = _parse_list(parser.get("security", "cors_origins"))

    # Backend section
    if parser.has_section("backend"):
        if parser.has_option("backend", "endpoint"):
            cfg.backend.endpoint = parser.get("backend", "endpoint")
        if parser.has_option("backend", "timeout_seconds"):
            cfg.backend.timeout_seconds = parser.getfloat("backend", "timeout_seconds")
        if parser.has_option("backend", "proxy"):
            cfg.backend.proxy = parser.get("backend", "proxy")
        if parser.has_option("backend", "dl_session"):
            cfg.backend.dl_session = parser.get("backend", "dl_session")

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: RelayConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings (prefixed name wins over the legacy bare name)
    if env_host := os.getenv("DEEPLX_HOST") or os.getenv("IP"):
        cfg.server.host = env_host
    if env_port := os.getenv("DEEPLX_PORT") or os.getenv("PORT"):
        cfg.server.port = int(env_port)

    # Security settings
    if env_token := os.getenv("TOKEN"):
        cfg.security.token = env_token
    if env_cors := os.getenv("DEEPLX_CORS_ORIGINS"):
        cfg.security.cors_origins = _parse_list(env_cors)

    # Backend settings
    if env_session := os.getenv("DL_SESSION"):
        cfg.backend.dl_session = env_session
    if env_proxy := os.getenv("PROXY"):
        cfg.backend.proxy = env_proxy
    if env_url := os.getenv("DEEPLX_BACKEND_URL"):
        cfg.backend.endpoint = env_url
    if env_timeout := os.getenv("DEEPLX_TIMEOUT_SECONDS"):
        cfg.backend.timeout_seconds = float(env_timeout)

    # Logging settings
    if env_log := os.getenv("DEEPLX_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()
    if env_log_format := os.getenv("DEEPLX_LOG_FORMAT"):
        if env_log_format.lower() in ("simple", "detailed"):
            cfg.logging.format = env_log_format.lower()  # type: ignore[assignment]


def load_config() -> RelayConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        RelayConfig: Fully populated configuration object.
    """
    cfg = RelayConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "RelayConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. An already-created app
    keeps the config object it was built with.

    Returns:
        RelayConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status(cfg: RelayConfig | None = None) -> dict:
    """
    Get configuration status for diagnostics.

    Secrets are reported only as set/unset; their values never leave this
    function.
    """
    cfg = cfg or config
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "listen": f"{cfg.server.host}:{cfg.server.port}",
        "token_set": cfg.auth_enabled,
        "dl_session_set": bool(cfg.backend.dl_session),
        "proxy": cfg.backend.proxy or None,
        "backend_endpoint": cfg.backend.endpoint,
        "timeout_seconds": cfg.backend.timeout_seconds,
        "log_level": cfg.logging.level,
    }


def print_config_summary(cfg: RelayConfig | None = None) -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status(cfg)
    print("\n" + "=" * 60)
    print("RELAY CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Listen:      {status['listen']}")
    print(f"Token:       {'set' if status['token_set'] else 'not set'}")
    print(f"dl_session:  {'set' if status['dl_session_set'] else 'not set'}")
    print(f"Proxy:       {status['proxy'] or 'none'}")
    print(f"Backend:     {status['backend_endpoint']} (timeout {status['timeout_seconds']}s)")
    print(f"Log level:   {status['log_level']}")
    print("=" * 60 + "\n")
