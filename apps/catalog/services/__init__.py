"""Services for restaurant and container type reference data."""

from .exceptions import (
    RestaurantNotFoundError,
    ContainerTypeNotFoundError,
)
from .catalog_queries import (
    get_restaurant,
    get_container_type,
    get_active_restaurants,
    get_active_container_types,
)

__all__ = [
    # Exceptions
    'RestaurantNotFoundError',
    'ContainerTypeNotFoundError',
    # Queries
    'get_restaurant',
    'get_container_type',
    'get_active_restaurants',
    'get_active_container_types',
]
