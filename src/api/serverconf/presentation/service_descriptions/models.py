"""Pydantic models for service description requests."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DisableServiceDescriptionRequest(BaseModel):
    """Request model for disabling a service description."""

    disabled_notice: str | None = Field(
        None,
        max_length=255,
        description="Message returned to clients while the services are disabled",
    )
