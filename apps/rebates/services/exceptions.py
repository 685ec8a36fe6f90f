"""Domain-specific exceptions for rebate mapping services."""

from apps.common.exceptions import NotFoundError


class RebateMappingNotFoundError(NotFoundError):
    """Raised when no rebate value is mapped for a restaurant and container type."""
    code = 'rebate_mapping_not_found'
    default_message = 'No rebate value found for this container type and restaurant'
