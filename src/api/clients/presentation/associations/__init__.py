"""User-client association routes and models."""

from clients.presentation.associations.routes import router

__all__ = ["router"]
