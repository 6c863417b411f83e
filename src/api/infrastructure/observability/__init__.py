"""Cross-cutting observability: database engine probes.

Bounded contexts define their own probes next to the code they observe;
this package holds the ones for shared infrastructure.
"""

from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from shared_kernel.observability_context import ObservationContext

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "ObservationContext",
]
