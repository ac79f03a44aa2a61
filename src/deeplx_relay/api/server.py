"""
FastAPI application for the translation relay.

This module builds and configures the FastAPI application. It sets up:
- CORS middleware so browser extensions and web clients can call the relay
- A ``{code, message}`` error body for every HTTP error, including unmatched
  routes (``404 Path not found``)
- The shared RelayOrchestrator handed to the translate routes
- Port discovery helpers used by ``deeplx-relay run``

The server runs on port 1188 by default. If that port is taken it can scan
1188-1287 for a free one.
"""

import logging
import socket

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from deeplx_relay import __version__
from deeplx_relay.api.routes import register_routes
from deeplx_relay.config import RelayConfig
from deeplx_relay.config import config as default_config
from deeplx_relay.translation.models import MSG_PATH_NOT_FOUND
from deeplx_relay.translation.service import RelayOrchestrator

logger = logging.getLogger(__name__)

# ============================================================================
# PORT CONFIGURATION
# ============================================================================

DEFAULT_PORT = 1188
PORT_RANGE_START = 1188
PORT_RANGE_END = 1287


def is_port_available(port: int, host: str = "0.0.0.0") -> bool:  # nosec B104
    """Return True if a TCP socket can bind ``host:port`` right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def find_available_port(
    preferred_port: int = DEFAULT_PORT,
    host: str = "0.0.0.0",  # nosec B104
    range_start: int = PORT_RANGE_START,
    range_end: int = PORT_RANGE_END,
) -> int | None:
    """
    Find a free port, trying ``preferred_port`` first.

    The preferred port is checked once; the scan over
    ``[range_start, range_end]`` skips it.

    Returns:
        An available port, or None when every port in the range is taken.
    """
    if is_port_available(preferred_port, host):
        return preferred_port
    for port in range(range_start, range_end + 1):
        if port == preferred_port:
            continue
        if is_port_available(port, host):
            return port
    return None


# ============================================================================
# APPLICATION FACTORY
# ============================================================================


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{code, message}``.

    Unmatched paths and wrong methods on known paths are both reported as
    ``404 Path not found``.
    """
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"code": 404, "message": MSG_PATH_NOT_FOUND})
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.status_code, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    cfg: RelayConfig | None = None,
    orchestrator: RelayOrchestrator | None = None,
) -> FastAPI:
    """
    Build a configured FastAPI application.

    Args:
        cfg: Relay configuration; defaults to the module-level singleton.
        orchestrator: Pre-built orchestrator (tests inject one with a stub
            transport); built from ``cfg`` when omitted.

    Returns:
        The ready-to-serve application. ``app.state.config`` holds ``cfg``.
    """
    cfg = cfg or default_config
    orchestrator = orchestrator or RelayOrchestrator.from_config(cfg)

    app = FastAPI(title="DeepLX Relay", version=__version__)
    app.state.config = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.security.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    register_routes(app, orchestrator)
    return app


def start_server(
    cfg: RelayConfig | None = None,
    *,
    auto_discover: bool = True,
) -> None:
    """
    Serve the relay with uvicorn until interrupted.

    Args:
        cfg: Relay configuration; defaults to the module-level singleton.
        auto_discover: When True and the configured port is busy, bind the
            first free port in the discovery range instead.

    Raises:
        OSError: If no port is available.
    """
    import uvicorn

    cfg = cfg or default_config
    host = cfg.server.host
    port = cfg.server.port

    if auto_discover:
        found = find_available_port(
            port, host, range_start=port, range_end=port + (PORT_RANGE_END - PORT_RANGE_START)
        )
        if found is None:
            raise OSError(f"No available port found starting at {port}")
        if found != port:
            logger.warning("Port %d is in use. Using port %d instead.", port, found)
        port = found

    logger.info("DeepLX Relay listening on %s:%d", host, port)
    uvicorn.run(create_app(cfg), host=host, port=port, log_level=cfg.logging.level.lower())


# Module-level app for ``uvicorn deeplx_relay.api.server:app``.
app = create_app()
