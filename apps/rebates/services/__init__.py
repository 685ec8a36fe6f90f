"""Services for restaurant-specific rebate values."""

from .exceptions import RebateMappingNotFoundError
from .mapping_resolver import (
    get_rebate_mapping,
    resolve_rebate_value,
    upsert_rebate_mappings,
    list_rebate_mappings_for_restaurant,
    list_rebate_mappings_for_container_type,
    get_rebate_value_for_staff,
)

__all__ = [
    # Exceptions
    'RebateMappingNotFoundError',
    # Mapping Resolver
    'get_rebate_mapping',
    'resolve_rebate_value',
    'upsert_rebate_mappings',
    'list_rebate_mappings_for_restaurant',
    'list_rebate_mappings_for_container_type',
    'get_rebate_value_for_staff',
]
