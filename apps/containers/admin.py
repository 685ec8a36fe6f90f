# ==========================================
# apps/containers/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from apps.containers.models import Container, ContainerStatus


STATUS_COLORS = {
    ContainerStatus.AVAILABLE: '#6B8E5E',
    ContainerStatus.ACTIVE: '#3B6EA5',
    ContainerStatus.RETURNED: '#8A8A8A',
    ContainerStatus.LOST: '#B23A48',
    ContainerStatus.DAMAGED: '#A47449',
}


@admin.register(Container)
class ContainerAdmin(admin.ModelAdmin):
    """
    Admin interface for containers and their registrations.

    Containers are created through the generate endpoint so that QR codes
    stay unique, and ownership, status and use counts only change through
    the container services. Only the issuing restaurant is editable here.
    """

    list_display = [
        'qr_code',
        'container_type',
        'status_badge',
        'customer',
        'restaurant',
        'uses_count',
        'registration_date',
        'updated_at',
    ]
    list_filter = ['status', 'container_type', 'restaurant', 'registration_date']
    search_fields = ['qr_code', 'customer__email']
    autocomplete_fields = ['restaurant']
    list_select_related = ['container_type', 'customer', 'restaurant']
    date_hierarchy = 'created_at'

    readonly_fields = [
        'qr_code',
        'container_type',
        'customer',
        'status',
        'uses_count',
        'registration_date',
        'last_used',
        'created_at',
        'updated_at',
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def status_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#ccc'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
