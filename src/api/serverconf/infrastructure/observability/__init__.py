"""Domain probes for server configuration infrastructure."""

from serverconf.infrastructure.observability.directory_probe import (
    DefaultGlobalConfDirectoryProbe,
    GlobalConfDirectoryProbe,
)
from serverconf.infrastructure.observability.repository_probe import (
    ClientRepositoryProbe,
    DefaultClientRepositoryProbe,
    DefaultIdentifierRepositoryProbe,
    IdentifierRepositoryProbe,
)

__all__ = [
    "ClientRepositoryProbe",
    "DefaultClientRepositoryProbe",
    "DefaultGlobalConfDirectoryProbe",
    "DefaultIdentifierRepositoryProbe",
    "GlobalConfDirectoryProbe",
    "IdentifierRepositoryProbe",
]
