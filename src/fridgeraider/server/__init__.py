"""ASGI application factory and dependencies for the FridgeRaider server."""

from fridgeraider.server.app import app, create_app

__all__ = ["app", "create_app"]
