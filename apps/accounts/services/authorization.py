"""
Restaurant scope capability checks.

Staff act only within their own restaurant; admins may act on any
restaurant; customers have no restaurant scope at all. These checks take
the caller's role and affiliation explicitly so every workflow applies the
same rule.
"""

import logging
from typing import Optional
from uuid import UUID

from apps.accounts.models import User, UserRole
from apps.catalog.models import Restaurant

from .exceptions import (
    UserNotFoundError,
    StaffWithoutRestaurantError,
    RestaurantAccessDeniedError,
    UserAccessDeniedError,
)

logger = logging.getLogger(__name__)


def can_access_restaurant(
    *,
    role: str,
    caller_restaurant_id: Optional[UUID],
    target_restaurant_id: UUID
) -> bool:
    """
    Return whether a caller may read or act on a restaurant's data.

    Args:
        role: Caller's user_type
        caller_restaurant_id: Caller's restaurant affiliation (may be None)
        target_restaurant_id: Restaurant being accessed

    Returns:
        True if access is allowed
    """
    if role == UserRole.ADMIN:
        return True
    if role == UserRole.STAFF:
        return (
            caller_restaurant_id is not None
            and str(caller_restaurant_id) == str(target_restaurant_id)
        )
    return False


def check_restaurant_access(*, user: User, restaurant_id: UUID) -> None:
    """
    Raise unless ``user`` may act within ``restaurant_id``.

    Raises:
        RestaurantAccessDeniedError: If the restaurant is outside the caller's scope
    """
    allowed = can_access_restaurant(
        role=user.user_type,
        caller_restaurant_id=user.restaurant_id,
        target_restaurant_id=restaurant_id,
    )
    if not allowed:
        logger.warning(
            "User %s (%s) denied access to restaurant %s",
            user.id, user.user_type, restaurant_id
        )
        raise RestaurantAccessDeniedError()


def check_user_access(*, user: User, target_user_id: UUID) -> None:
    """
    Raise unless ``user`` may read data belonging to ``target_user_id``.

    Users may always read their own data. Admins may read anyone's. Staff
    may read users affiliated with their own restaurant.

    Raises:
        UserNotFoundError: If the target user doesn't exist
        UserAccessDeniedError: If access is not allowed
    """
    if str(user.id) == str(target_user_id):
        return

    try:
        target = User.objects.get(id=target_user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {target_user_id} not found")

    if user.user_type == UserRole.ADMIN:
        return

    if (
        user.user_type == UserRole.STAFF
        and user.restaurant_id is not None
        and target.restaurant_id == user.restaurant_id
    ):
        return

    raise UserAccessDeniedError()


def get_staff_restaurant(*, staff_id: UUID) -> Restaurant:
    """
    Resolve the restaurant a staff member acts for.

    Args:
        staff_id: Acting staff (or admin) user ID

    Returns:
        The user's affiliated Restaurant

    Raises:
        StaffWithoutRestaurantError: If the user is missing or unaffiliated
    """
    staff = (
        User.objects
        .select_related('restaurant')
        .filter(id=staff_id)
        .first()
    )
    if staff is None or staff.restaurant is None:
        raise StaffWithoutRestaurantError()
    return staff.restaurant
