"""Client service access right and service client routes."""

from serverconf.presentation.clients.routes import router

__all__ = ["router"]
