# Transport Layer
# Serves the registry over HTTP (FastAPI); rendering of the legacy
# text and JSON formats lives with the registry projections

from botregistry.transport.app import app, create_app

__all__ = ["app", "create_app"]
