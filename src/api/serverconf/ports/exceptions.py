"""Exceptions for the server configuration bounded context.

These exceptions represent domain-level errors raised by application
services and repositories. The presentation layer translates them into
HTTP responses; each carries a stable ``error_code`` for logs and clients.
"""


class ServerConfError(Exception):
    """Base class for server configuration errors."""

    error_code = "serverconf_error"


class NotFoundError(ServerConfError):
    """Base class for errors caused by a reference that does not resolve."""

    error_code = "not_found"


class ClientNotFoundError(NotFoundError):
    """Raised when a client identity does not resolve to a configured client."""

    error_code = "client_not_found"


class ServiceNotFoundError(NotFoundError):
    """Raised when a full service code is not present on the client."""

    error_code = "service_not_found"


class EndpointNotFoundError(NotFoundError):
    """Raised when an endpoint id (or a service's base endpoint) does not resolve."""

    error_code = "endpoint_not_found"


class LocalGroupNotFoundError(NotFoundError):
    """Raised when a local group id or code does not belong to the target client."""

    error_code = "local_group_not_found"


class AccessRightNotFoundError(NotFoundError):
    """Raised when removing an access right that is not currently held.

    The whole removal is aborted; nothing is removed.
    """

    error_code = "accessright_not_found"


class ServiceDescriptionNotFoundError(NotFoundError):
    """Raised when a service description id does not resolve."""

    error_code = "service_description_not_found"


class IdentifierNotFoundError(ServerConfError):
    """Raised when a subsystem or global group is absent from the global configuration.

    This is a deterministic rejection of the request input, not a transient
    fault; retrying with the same input fails the same way.
    """

    error_code = "identifier_not_found"


class DuplicateAccessRightError(ServerConfError):
    """Raised when granting an access right the subject already holds.

    The whole grant is aborted; nothing is committed.
    """

    error_code = "duplicate_accessright"


class DirectoryUnavailableError(ServerConfError):
    """Raised when the global configuration cannot be queried.

    Transient and retryable. Existence checks propagate it; listings
    degrade to empty results instead.
    """

    error_code = "global_conf_unavailable"


class ClientLockedError(ServerConfError):
    """Raised when another change to the same client holds its lock too long.

    Transient and retryable; nothing was changed.
    """

    error_code = "client_locked"
