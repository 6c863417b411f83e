from typing import Annotated

from fastapi import Header

from shared_kernel.observability_context import ObservationContext


def get_observation_context(
    x_request_id: Annotated[str | None, Header()] = None,
) -> ObservationContext:
    """Build the observation context of the current request.

    Args:
        x_request_id: Request id propagated by the reverse proxy, if any

    Returns:
        ObservationContext bound to the request id
    """
    return ObservationContext(request_id=x_request_id)
