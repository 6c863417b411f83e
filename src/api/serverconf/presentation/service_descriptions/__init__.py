"""Service description routes."""

from serverconf.presentation.service_descriptions.routes import router

__all__ = ["router"]
