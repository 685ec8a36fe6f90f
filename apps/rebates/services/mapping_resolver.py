"""
Rebate mapping resolver.

Looks up and maintains the (restaurant, container type) -> rebate value
table. Resolution is exact-match only: a container type's own
``rebate_value`` is never used as a fallback when a mapping is missing.
"""

import logging
from decimal import Decimal
from typing import Iterable, List
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.services import get_staff_restaurant
from apps.catalog.models import ContainerType
from apps.catalog.services import (
    get_restaurant,
    get_container_type,
    ContainerTypeNotFoundError,
)

from ..models import RestaurantContainerRebate
from .exceptions import RebateMappingNotFoundError

logger = logging.getLogger(__name__)


def get_rebate_mapping(
    *,
    restaurant_id: UUID,
    container_type_id: UUID
) -> RestaurantContainerRebate:
    """
    Get the mapping for an exact (restaurant, container type) pair.

    Raises:
        RebateMappingNotFoundError: If no mapping exists for the pair
    """
    mapping = (
        RestaurantContainerRebate.objects
        .filter(restaurant_id=restaurant_id, container_type_id=container_type_id)
        .first()
    )
    if mapping is None:
        raise RebateMappingNotFoundError()
    return mapping


def resolve_rebate_value(*, restaurant_id: UUID, container_type_id: UUID) -> Decimal:
    """
    Resolve the rebate amount a restaurant pays for a container type.

    Args:
        restaurant_id: Restaurant granting the rebate
        container_type_id: Type of the container being used

    Returns:
        The mapped rebate value

    Raises:
        RebateMappingNotFoundError: If no mapping exists for the pair
    """
    return get_rebate_mapping(
        restaurant_id=restaurant_id,
        container_type_id=container_type_id,
    ).rebate_value


def _collapse_mappings(container_type_mappings: Iterable[dict]) -> dict:
    """Key mappings by container type; a later entry for the same type wins."""
    collapsed = {}
    for mapping in container_type_mappings:
        collapsed[str(mapping['container_type_id'])] = mapping['rebate_value']
    return collapsed


def upsert_rebate_mappings(
    *,
    restaurant_id: UUID,
    container_type_mappings: List[dict]
) -> List[RestaurantContainerRebate]:
    """
    Create or overwrite rebate values for one restaurant.

    The batch is all-or-nothing: every container type is validated before
    any row is written, and all writes share one transaction.

    Args:
        restaurant_id: Restaurant the values apply to
        container_type_mappings: List of dicts with ``container_type_id``
            and ``rebate_value``

    Returns:
        Saved mappings, in the order their container types first appeared

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        ContainerTypeNotFoundError: If any container type doesn't exist
    """
    restaurant = get_restaurant(restaurant_id=restaurant_id)
    values = _collapse_mappings(container_type_mappings)

    existing_ids = {
        str(pk) for pk in
        ContainerType.objects.filter(id__in=list(values)).values_list('id', flat=True)
    }
    missing = [type_id for type_id in values if type_id not in existing_ids]
    if missing:
        raise ContainerTypeNotFoundError(
            f"Container type {missing[0]} not found",
            missing_container_type_ids=missing,
        )

    saved = []
    with transaction.atomic():
        for container_type_id, rebate_value in values.items():
            mapping, _ = RestaurantContainerRebate.objects.update_or_create(
                restaurant=restaurant,
                container_type_id=container_type_id,
                defaults={'rebate_value': rebate_value},
            )
            saved.append(mapping)

    logger.info(
        "Saved %d rebate mapping(s) for restaurant %s", len(saved), restaurant.id
    )
    return saved


def list_rebate_mappings_for_restaurant(
    *,
    restaurant_id: UUID
) -> QuerySet[RestaurantContainerRebate]:
    """
    List all rebate mappings of a restaurant.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
    """
    get_restaurant(restaurant_id=restaurant_id)
    return (
        RestaurantContainerRebate.objects
        .filter(restaurant_id=restaurant_id)
        .select_related('restaurant', 'container_type')
    )


def list_rebate_mappings_for_container_type(
    *,
    container_type_id: UUID
) -> QuerySet[RestaurantContainerRebate]:
    """
    List the rebate a container type earns at each restaurant.

    Raises:
        ContainerTypeNotFoundError: If container type doesn't exist
    """
    get_container_type(container_type_id=container_type_id)
    return (
        RestaurantContainerRebate.objects
        .filter(container_type_id=container_type_id)
        .select_related('restaurant', 'container_type')
    )


def get_rebate_value_for_staff(*, staff_id: UUID, container_type_id: UUID) -> Decimal:
    """
    Resolve the rebate value at the acting staff member's restaurant.

    When the mapping is missing, the error carries the container type's
    default value for display. It is never used as the rebate amount.

    Raises:
        StaffWithoutRestaurantError: If staff has no restaurant
        ContainerTypeNotFoundError: If container type doesn't exist
        RebateMappingNotFoundError: If no mapping exists
    """
    restaurant = get_staff_restaurant(staff_id=staff_id)
    container_type = get_container_type(container_type_id=container_type_id)

    try:
        return resolve_rebate_value(
            restaurant_id=restaurant.id,
            container_type_id=container_type.id,
        )
    except RebateMappingNotFoundError:
        raise RebateMappingNotFoundError(
            default_rebate_value=(
                str(container_type.rebate_value)
                if container_type.rebate_value is not None else None
            ),
        )
