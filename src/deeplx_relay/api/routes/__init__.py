"""API route registration."""

from fastapi import FastAPI

from deeplx_relay.api.routes import health, translate
from deeplx_relay.translation.service import RelayOrchestrator


def register_routes(app: FastAPI, orchestrator: RelayOrchestrator) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router)
    app.include_router(translate.router(orchestrator))
