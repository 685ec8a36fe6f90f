"""Services for the container lifecycle."""

from .exceptions import (
    ContainerNotFoundError,
    ContainerNotRegisteredError,
    MaxUsesReachedError,
    ContainerAlreadyReturnedError,
    ContainerNotActiveError,
    InvalidContainerStatusError,
    ContainerNotOwnedError,
    QrCodeGenerationError,
)
from .registry import (
    generate_qr_code,
    get_container_by_qr,
)
from .workflow import (
    RegistrationOutcome,
    RebateOutcome,
    generate_container,
    register_container,
    process_rebate,
    process_return,
    mark_container_status,
)
from .statistics import (
    get_customer_container_stats,
    get_restaurant_container_stats,
    list_customer_containers,
    list_restaurant_containers,
)

__all__ = [
    # Exceptions
    'ContainerNotFoundError',
    'ContainerNotRegisteredError',
    'MaxUsesReachedError',
    'ContainerAlreadyReturnedError',
    'ContainerNotActiveError',
    'InvalidContainerStatusError',
    'ContainerNotOwnedError',
    'QrCodeGenerationError',
    # Registry
    'generate_qr_code',
    'get_container_by_qr',
    # Workflow
    'RegistrationOutcome',
    'RebateOutcome',
    'generate_container',
    'register_container',
    'process_rebate',
    'process_return',
    'mark_container_status',
    # Statistics
    'get_customer_container_stats',
    'get_restaurant_container_stats',
    'list_customer_containers',
    'list_restaurant_containers',
]
