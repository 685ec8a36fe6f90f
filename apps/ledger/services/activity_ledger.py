"""Activity ledger: insert-only audit trail of container lifecycle events."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import DatabaseError
from django.db.models import QuerySet

from ..models import Activity, ActivityType
from .exceptions import LedgerWriteError

logger = logging.getLogger(__name__)


def record_activity(
    *,
    user_id: UUID,
    type: str,
    container_id: Optional[UUID] = None,
    container_type_id: Optional[UUID] = None,
    restaurant_id: Optional[UUID] = None,
    amount: Optional[Decimal] = None,
    location: str = '',
    notes: str = ''
) -> Activity:
    """
    Append an activity entry.

    Args:
        user_id: Customer the event concerns
        type: One of ActivityType
        container_id: Container involved
        container_type_id: Container's type
        restaurant_id: Restaurant where it happened
        amount: Rebate amount for rebate events
        location: Restaurant name snapshot
        notes: Free-form description

    Returns:
        Created Activity

    Raises:
        ValueError: If type is not a known ActivityType
        LedgerWriteError: If the entry could not be written
    """
    if type not in ActivityType.values:
        raise ValueError(f"Unknown activity type: {type}")

    try:
        return Activity.objects.create(
            user_id=user_id,
            type=type,
            container_id=container_id,
            container_type_id=container_type_id,
            restaurant_id=restaurant_id,
            amount=amount,
            location=location,
            notes=notes,
        )
    except DatabaseError as e:
        logger.error("Failed to record %s activity for user %s: %s", type, user_id, e)
        raise LedgerWriteError(f"Failed to record {type} activity") from e


def list_recent_activity(*, user_id: UUID, limit: Optional[int] = None) -> QuerySet[Activity]:
    """
    Get a user's most recent activity, newest first.

    Args:
        user_id: User whose activity to list
        limit: Max entries (defaults to AQRO_RECENT_ACTIVITY_LIMIT)
    """
    if limit is None:
        limit = settings.AQRO_RECENT_ACTIVITY_LIMIT
    return (
        Activity.objects
        .filter(user_id=user_id)
        .select_related('container', 'container_type', 'restaurant')
        .order_by('-created_at')[:limit]
    )


def list_container_history(*, container_id: UUID) -> QuerySet[Activity]:
    """Get every activity for a container, oldest first."""
    return (
        Activity.objects
        .filter(container_id=container_id)
        .select_related('container_type', 'restaurant')
        .order_by('created_at')
    )
