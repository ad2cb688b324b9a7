"""Client routes and models."""

from clients.presentation.clients.routes import router

__all__ = ["router"]
