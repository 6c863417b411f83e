from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from infrastructure.settings import GlobalConfSettings, get_globalconf_settings
from serverconf.application.observability import (
    DefaultGlobalConfServiceProbe,
    GlobalConfServiceProbe,
)
from serverconf.application.services import GlobalConfService
from serverconf.dependencies.observability import get_observation_context
from serverconf.infrastructure.globalconf_directory import GlobalConfSnapshotDirectory
from serverconf.ports.directory import IGlobalConfDirectory
from shared_kernel.observability_context import ObservationContext


@lru_cache
def get_globalconf_directory() -> IGlobalConfDirectory:
    """Get the process-wide snapshot directory.

    Cached so that the parsed snapshot is shared between requests.
    """
    settings = get_globalconf_settings()
    return GlobalConfSnapshotDirectory(snapshot_path=settings.snapshot_path)


def get_global_conf_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> GlobalConfServiceProbe:
    return DefaultGlobalConfServiceProbe().with_context(context)


def get_global_conf_service(
    directory: Annotated[IGlobalConfDirectory, Depends(get_globalconf_directory)],
    settings: Annotated[GlobalConfSettings, Depends(get_globalconf_settings)],
    probe: Annotated[GlobalConfServiceProbe, Depends(get_global_conf_service_probe)],
) -> GlobalConfService:
    """Get GlobalConfService instance.

    Args:
        directory: Snapshot directory
        settings: Global configuration settings (query timeout)
        probe: Probe for observability

    Returns:
        GlobalConfService bounded by the configured timeout
    """
    return GlobalConfService(
        directory=directory,
        timeout_seconds=settings.timeout_seconds,
        probe=probe,
    )
