"""Services for accounts business logic."""

from .exceptions import (
    UserNotFoundError,
    StaffWithoutRestaurantError,
    RestaurantAccessDeniedError,
    UserAccessDeniedError,
)
from .authorization import (
    can_access_restaurant,
    check_restaurant_access,
    check_user_access,
    get_staff_restaurant,
)

__all__ = [
    # Exceptions
    'UserNotFoundError',
    'StaffWithoutRestaurantError',
    'RestaurantAccessDeniedError',
    'UserAccessDeniedError',
    # Authorization
    'can_access_restaurant',
    'check_restaurant_access',
    'check_user_access',
    'get_staff_restaurant',
]
