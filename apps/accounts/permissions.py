"""
Role-based permission classes.

Roles come from ``User.user_type``. Restaurant scoping is not checked
here; it needs the target restaurant and is done by
``apps.accounts.services.check_restaurant_access`` inside the services.

Usage:
    @api_view(['POST'])
    @permission_classes([IsAuthenticated, IsRestaurantStaff])
    def process_rebate(request):
        ...
"""

from rest_framework.permissions import BasePermission

from .models import UserRole


class IsCustomer(BasePermission):
    """Allow only customer accounts."""

    message = 'Only customers can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.user_type == UserRole.CUSTOMER)


class IsRestaurantStaff(BasePermission):
    """Allow restaurant staff and admins."""

    message = 'Only restaurant staff can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated
            and user.user_type in (UserRole.STAFF, UserRole.ADMIN)
        )


class IsPlatformAdmin(BasePermission):
    """Allow only admin accounts."""

    message = 'Only admins can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.user_type == UserRole.ADMIN)
