# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.CUSTOMER: '#6B8E5E',
    UserRole.STAFF: '#A47449',
    UserRole.ADMIN: '#2C1810',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for platform users.

    Staff and admin accounts are bound to their restaurant here; customer
    accounts cannot carry a restaurant (enforced by ``User.clean``).
    """

    list_display = [
        'email',
        'get_display_name',
        'role_badge',
        'restaurant',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'user_type',
        'is_active',
        'is_staff',
        'restaurant',
        'created_at',
    ]

    search_fields = [
        'email',
        'first_name',
        'last_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'
    autocomplete_fields = ['restaurant']

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'first_name', 'last_name', 'password')
        }),
        ('Role', {
            'fields': ('user_type', 'restaurant'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'password1', 'password2'),
        }),
        ('Role', {
            'fields': ('user_type', 'restaurant'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.user_type, '#ccc'),
            obj.get_user_type_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'user_type'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        """Activate selected users."""
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers for safety)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s) for safety.'
        self.message_user(request, msg)
