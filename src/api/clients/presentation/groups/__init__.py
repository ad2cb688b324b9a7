"""Client group routes and models."""

from clients.presentation.groups.routes import router

__all__ = ["router"]
