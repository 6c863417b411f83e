"""Endpoint access right routes."""

from serverconf.presentation.endpoints.routes import router

__all__ = ["router"]
