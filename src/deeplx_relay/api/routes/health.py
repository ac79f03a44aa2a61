"""Root and health endpoints.

``/`` identifies the API and points callers at ``/translate``; ``/health``
is a liveness check that never touches the backend.
"""

from fastapi import APIRouter

from deeplx_relay import __version__
from deeplx_relay.api.models import HealthResponse, RootResponse

ROOT_MESSAGE = "DeepL Free API, served by deeplx-relay. Go to /translate with POST."

router = APIRouter()


@router.get("/", response_model=RootResponse)
async def root():
    """Root endpoint describing the API."""
    return {"code": 200, "message": ROOT_MESSAGE}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}
