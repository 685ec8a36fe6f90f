from django.contrib import admin
from apps.ledger.models import Rebate, Activity


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    """Ledger entries can be browsed but never added, edited or removed."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Rebate)
class RebateAdmin(ReadOnlyLedgerAdmin):
    list_display = ['created_at', 'customer', 'staff', 'amount', 'location', 'container']
    list_filter = ['location', 'created_at']
    search_fields = ['customer__email', 'staff__email', 'container__qr_code']
    date_hierarchy = 'created_at'


@admin.register(Activity)
class ActivityAdmin(ReadOnlyLedgerAdmin):
    list_display = ['created_at', 'type', 'user', 'container', 'restaurant', 'amount']
    list_filter = ['type', 'restaurant', 'created_at']
    search_fields = ['user__email', 'container__qr_code', 'notes']
    date_hierarchy = 'created_at'
