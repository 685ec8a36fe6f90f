from django.contrib import admin
from apps.rebates.models import RestaurantContainerRebate


@admin.register(RestaurantContainerRebate)
class RestaurantContainerRebateAdmin(admin.ModelAdmin):
    """Admin interface for per-restaurant rebate values."""

    list_display = ['restaurant', 'container_type', 'rebate_value', 'updated_at']
    list_filter = ['restaurant', 'container_type']
    search_fields = ['restaurant__name', 'container_type__name']
    readonly_fields = ['created_at', 'updated_at']
