"""
Domain-specific exceptions for container services.

These exceptions represent business rule violations and are turned into
structured error responses by the API exception handler.
"""

from apps.common.exceptions import (
    InternalError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)


class ContainerNotFoundError(NotFoundError):
    """Raised when container does not exist."""
    code = 'container_not_found'
    default_message = 'Container not found'


class ContainerNotRegisteredError(InvalidStateError):
    """Raised when a staff operation targets a container with no owner."""
    code = 'container_not_registered'
    default_message = 'Container is not registered to any customer'


class MaxUsesReachedError(InvalidStateError):
    """Raised when a container has no uses left."""
    code = 'max_uses_reached'
    default_message = 'Container has reached its maximum number of uses'


class ContainerAlreadyReturnedError(InvalidStateError):
    """Raised when returning a container that is already returned."""
    code = 'already_returned'
    default_message = 'Container is already marked as returned'


class ContainerNotActiveError(InvalidStateError):
    """Raised when a customer reports on a container that is not active."""
    code = 'container_not_active'
    default_message = 'Only active containers can be marked as lost or damaged'


class InvalidContainerStatusError(InvalidStateError):
    """Raised when a requested status cannot be set by the caller."""
    code = 'invalid_status'
    default_message = 'Invalid container status'


class ContainerNotOwnedError(UnauthorizedError):
    """Raised when a customer acts on a container registered to someone else."""
    code = 'container_not_owned'
    default_message = 'Container is not registered to your account'


class QrCodeGenerationError(InternalError):
    """Raised when no unique QR code could be generated."""
    code = 'qr_code_generation_failed'
    default_message = 'Failed to generate a unique QR code'
