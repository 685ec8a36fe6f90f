"""Container statistics and listings for customers and restaurants."""

from uuid import UUID

from django.db.models import Count, Q, QuerySet

from apps.accounts.models import User
from apps.accounts.services import check_restaurant_access
from apps.catalog.services import get_restaurant
from apps.ledger.services import get_customer_rebate_totals

from ..models import Container, ContainerStatus


def _count_by_status(queryset: QuerySet, statuses) -> dict:
    aggregates = queryset.aggregate(**{
        f'{status.value}_containers': Count('id', filter=Q(status=status))
        for status in statuses
    })
    return aggregates


def get_customer_container_stats(*, customer_id: UUID) -> dict:
    """
    Calculate a customer's container counts and lifetime rebate total.

    Returns:
        Dictionary with:
        - active_containers: int
        - returned_containers: int
        - lost_containers: int
        - damaged_containers: int
        - total_rebate: Decimal - Sum of every rebate received
        - rebate_count: int
    """
    stats = _count_by_status(
        Container.objects.filter(customer_id=customer_id),
        [
            ContainerStatus.ACTIVE,
            ContainerStatus.RETURNED,
            ContainerStatus.LOST,
            ContainerStatus.DAMAGED,
        ],
    )
    totals = get_customer_rebate_totals(customer_id=customer_id)
    stats['total_rebate'] = totals['total_rebate_amount']
    stats['rebate_count'] = totals['rebate_count']
    return stats


def get_restaurant_container_stats(*, restaurant_id: UUID, user: User) -> dict:
    """
    Count a restaurant's containers by status.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        RestaurantAccessDeniedError: If the caller is outside the restaurant's scope
    """
    get_restaurant(restaurant_id=restaurant_id)
    check_restaurant_access(user=user, restaurant_id=restaurant_id)

    return _count_by_status(
        Container.objects.filter(restaurant_id=restaurant_id),
        [
            ContainerStatus.AVAILABLE,
            ContainerStatus.ACTIVE,
            ContainerStatus.RETURNED,
        ],
    )


def list_customer_containers(*, customer_id: UUID) -> QuerySet[Container]:
    return (
        Container.objects
        .filter(customer_id=customer_id)
        .select_related('container_type', 'restaurant')
        .order_by('-updated_at')
    )


def list_restaurant_containers(*, restaurant_id: UUID, user: User) -> QuerySet[Container]:
    """
    List containers issued for a restaurant, most recently updated first.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        RestaurantAccessDeniedError: If the caller is outside the restaurant's scope
    """
    get_restaurant(restaurant_id=restaurant_id)
    check_restaurant_access(user=user, restaurant_id=restaurant_id)

    return (
        Container.objects
        .filter(restaurant_id=restaurant_id)
        .select_related('container_type', 'customer', 'restaurant')
        .order_by('-updated_at')
    )
