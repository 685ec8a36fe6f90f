# ==========================================
# apps/catalog/admin.py
# ==========================================

from django.contrib import admin
from apps.catalog.models import Restaurant, ContainerType


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """Admin interface for partner restaurants."""

    list_display = ['name', 'location', 'contact_number', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'location']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(ContainerType)
class ContainerTypeAdmin(admin.ModelAdmin):
    """Admin interface for container types."""

    list_display = ['name', 'price', 'rebate_value', 'max_uses', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
