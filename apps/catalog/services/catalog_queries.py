"""Catalog lookups for restaurants and container types."""

from uuid import UUID

from django.db.models import QuerySet

from ..models import Restaurant, ContainerType
from .exceptions import RestaurantNotFoundError, ContainerTypeNotFoundError


def get_restaurant(*, restaurant_id: UUID) -> Restaurant:
    """
    Get a restaurant by ID.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
    """
    try:
        return Restaurant.objects.get(id=restaurant_id)
    except Restaurant.DoesNotExist:
        raise RestaurantNotFoundError(f"Restaurant {restaurant_id} not found")


def get_container_type(*, container_type_id: UUID) -> ContainerType:
    """
    Get a container type by ID.

    Raises:
        ContainerTypeNotFoundError: If container type doesn't exist
    """
    try:
        return ContainerType.objects.get(id=container_type_id)
    except ContainerType.DoesNotExist:
        raise ContainerTypeNotFoundError(f"Container type {container_type_id} not found")


def get_active_restaurants() -> QuerySet[Restaurant]:
    return Restaurant.objects.filter(is_active=True).order_by('name')


def get_active_container_types() -> QuerySet[ContainerType]:
    return ContainerType.objects.filter(is_active=True).order_by('name')
