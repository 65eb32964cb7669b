"""Web layer for userauth: FastAPI app, routes and dependencies."""
