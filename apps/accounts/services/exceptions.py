"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import InvalidStateError, NotFoundError, UnauthorizedError


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    code = 'user_not_found'
    default_message = 'User not found'


class StaffWithoutRestaurantError(InvalidStateError):
    """Raised when a staff user acts without a restaurant affiliation."""
    code = 'staff_without_restaurant'
    default_message = 'Staff user is not associated with a restaurant'


class RestaurantAccessDeniedError(UnauthorizedError):
    """Raised when a user reaches outside their restaurant's scope."""
    code = 'restaurant_access_denied'
    default_message = 'Unauthorized access to restaurant data'


class UserAccessDeniedError(UnauthorizedError):
    """Raised when a user reads another user's private data."""
    code = 'user_access_denied'
    default_message = 'Unauthorized access to user data'
