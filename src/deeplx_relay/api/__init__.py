"""HTTP surface of the relay: FastAPI app, auth, request models, routes."""
