"""Server configuration presentation layer - aggregate-based organization.

Each package contains the routes (and request models) for one resource.
"""

from __future__ import annotations

from fastapi import APIRouter

from serverconf.presentation import clients, endpoints, service_descriptions

router = APIRouter(prefix="/api")

router.include_router(endpoints.router)
router.include_router(clients.router)
router.include_router(service_descriptions.router)

__all__ = ["router"]
