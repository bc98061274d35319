"""App module - Sample application served by the router."""

from hookrouter_core.app.routes import create_gateway, setup_routes

__all__ = [
    "create_gateway",
    "setup_routes",
]
