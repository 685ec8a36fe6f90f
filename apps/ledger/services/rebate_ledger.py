"""Rebate ledger: insert-only rebate records and payout totals."""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import DatabaseError
from django.db.models import Count, QuerySet, Sum

from ..models import Rebate
from .exceptions import LedgerWriteError

logger = logging.getLogger(__name__)


def record_rebate(
    *,
    container_id: UUID,
    customer_id: UUID,
    staff_id: UUID,
    amount: Decimal,
    location: str = ''
) -> Rebate:
    """
    Append a rebate record.

    Args:
        container_id: Container that was used
        customer_id: Customer receiving the rebate
        staff_id: Staff member who processed it
        amount: Rebate amount snapshot
        location: Restaurant name snapshot

    Returns:
        Created Rebate

    Raises:
        LedgerWriteError: If the record could not be written
    """
    try:
        return Rebate.objects.create(
            container_id=container_id,
            customer_id=customer_id,
            staff_id=staff_id,
            amount=amount,
            location=location,
        )
    except DatabaseError as e:
        logger.error("Failed to record rebate for container %s: %s", container_id, e)
        raise LedgerWriteError(f"Failed to record rebate for container {container_id}") from e


def _totals(queryset: QuerySet) -> dict:
    aggregates = queryset.aggregate(total=Sum('amount'), count=Count('id'))
    return {
        'total_rebate_amount': aggregates['total'] or Decimal('0.00'),
        'rebate_count': aggregates['count'],
    }


def get_customer_rebate_totals(*, customer_id: UUID) -> dict:
    """Lifetime rebate sum and count received by a customer."""
    return _totals(Rebate.objects.filter(customer_id=customer_id))


def get_staff_rebate_totals(*, staff_id: UUID) -> dict:
    """Rebate sum and count processed by one staff member."""
    return _totals(Rebate.objects.filter(staff_id=staff_id))


def get_restaurant_rebate_totals(*, restaurant_id: UUID) -> dict:
    """
    Rebate sum and count processed by all staff of a restaurant.

    Attribution follows the processing staff member's current affiliation.
    """
    return _totals(Rebate.objects.filter(staff__restaurant_id=restaurant_id))


def list_customer_rebates(*, customer_id: UUID) -> QuerySet[Rebate]:
    return (
        Rebate.objects
        .filter(customer_id=customer_id)
        .select_related('container', 'container__container_type')
        .order_by('-created_at')
    )
