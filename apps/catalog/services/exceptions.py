"""Domain-specific exceptions for catalog services."""

from apps.common.exceptions import NotFoundError


class RestaurantNotFoundError(NotFoundError):
    """Raised when restaurant does not exist."""
    code = 'restaurant_not_found'
    default_message = 'Restaurant not found'


class ContainerTypeNotFoundError(NotFoundError):
    """Raised when container type does not exist."""
    code = 'container_type_not_found'
    default_message = 'Container type not found'
