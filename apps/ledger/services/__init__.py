"""Services for the rebate and activity ledgers."""

from .exceptions import LedgerWriteError
from .rebate_ledger import (
    record_rebate,
    get_customer_rebate_totals,
    get_staff_rebate_totals,
    get_restaurant_rebate_totals,
    list_customer_rebates,
)
from .activity_ledger import (
    record_activity,
    list_recent_activity,
    list_container_history,
)

__all__ = [
    # Exceptions
    'LedgerWriteError',
    # Rebate Ledger
    'record_rebate',
    'get_customer_rebate_totals',
    'get_staff_rebate_totals',
    'get_restaurant_rebate_totals',
    'list_customer_rebates',
    # Activity Ledger
    'record_activity',
    'list_recent_activity',
    'list_container_history',
]
