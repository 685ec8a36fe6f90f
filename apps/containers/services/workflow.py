"""
Container workflow service.

Use cases that move a container through its lifecycle: generation,
registration by a customer, rebates and returns processed by restaurant
staff, and lost/damaged reports by the owner.

Each use case runs in one transaction. The container row is locked first,
state guards are checked, and the mutation itself is a conditional update
(see ``registry``), so concurrent requests on the same container are
serialized and the losers see the winner's result. If writing the rebate
or activity entry fails, the whole use case is rolled back.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.accounts.services import get_staff_restaurant
from apps.catalog.services import get_container_type, get_restaurant
from apps.ledger.models import ActivityType, Rebate
from apps.ledger.services import record_activity, record_rebate
from apps.rebates.services import resolve_rebate_value

from ..models import (
    Container,
    ContainerStatus,
    CUSTOMER_REPORTABLE_STATUSES,
    statuses_leading_to,
)
from . import registry
from .exceptions import (
    ContainerAlreadyReturnedError,
    ContainerNotActiveError,
    ContainerNotOwnedError,
    ContainerNotRegisteredError,
    InvalidContainerStatusError,
    MaxUsesReachedError,
)

logger = logging.getLogger(__name__)


@dataclass
class RegistrationOutcome:
    """
    Result of a registration attempt.

    ``container`` is None when the container belongs to another customer.
    """

    container: Optional[Container]
    already_registered: bool
    owned_by_current_user: bool
    message: str

    @property
    def success(self):
        return not self.already_registered or self.owned_by_current_user


@dataclass
class RebateOutcome:
    """Result of a processed rebate."""

    rebate: Rebate
    amount: Decimal
    container: Container


def generate_container(
    *,
    container_type_id: UUID,
    restaurant_id: Optional[UUID] = None
) -> Container:
    """
    Create a new unowned container with a unique QR code.

    Args:
        container_type_id: Type of container to create
        restaurant_id: Restaurant the container is issued for (optional)

    Returns:
        Created Container with status=available

    Raises:
        ContainerTypeNotFoundError: If container type doesn't exist
        RestaurantNotFoundError: If restaurant_id is given but doesn't exist
        QrCodeGenerationError: If no unique code could be generated
    """
    container_type = get_container_type(container_type_id=container_type_id)
    restaurant = get_restaurant(restaurant_id=restaurant_id) if restaurant_id else None

    container = registry.create_container(
        container_type=container_type,
        restaurant=restaurant,
    )

    logger.info(
        "Generated container %s (%s) for restaurant %s",
        container.qr_code, container_type.name, restaurant_id
    )
    return container


def _already_registered(container: Container, customer: User) -> RegistrationOutcome:
    if container.customer_id == customer.id:
        return RegistrationOutcome(
            container=container,
            already_registered=True,
            owned_by_current_user=True,
            message='Container is already registered to your account',
        )
    return RegistrationOutcome(
        container=None,
        already_registered=True,
        owned_by_current_user=False,
        message='Container is already registered to another user',
    )


def register_container(*, qr_code: str, customer: User) -> RegistrationOutcome:
    """
    Register a container to a customer by QR code.

    Re-registering one's own container is an idempotent success; a
    container owned by someone else is reported, never reassigned.

    Args:
        qr_code: Scanned QR code
        customer: Customer claiming the container

    Returns:
        RegistrationOutcome describing which of the three cases applied

    Raises:
        ContainerNotFoundError: If no container has this code
    """
    with transaction.atomic():
        container = registry.lock_container_by_qr(qr_code=qr_code)

        if container.customer_id is not None:
            return _already_registered(container, customer)

        if not registry.claim_ownership(container_id=container.id, customer_id=customer.id):
            # Lost a race against another registration
            container.refresh_from_db()
            return _already_registered(container, customer)

        container.refresh_from_db()

        record_activity(
            user_id=customer.id,
            type=ActivityType.REGISTRATION,
            container_id=container.id,
            container_type_id=container.container_type_id,
            restaurant_id=container.restaurant_id,
            notes='Container registered',
        )

    logger.info("Container %s registered to customer %s", container.qr_code, customer.id)
    return RegistrationOutcome(
        container=container,
        already_registered=False,
        owned_by_current_user=True,
        message='Container registered successfully',
    )


def process_rebate(*, container_id: UUID, staff: User) -> RebateOutcome:
    """
    Grant a rebate for one use of a container.

    This operation:
    1. Locks the container and checks it has an owner
    2. Checks the container has uses left
    3. Resolves the staff member's restaurant
    4. Resolves the (restaurant, container type) rebate value, with no
       fallback to the type's default
    5. Increments ``uses_count`` only if still under ``max_uses``
    6. Appends the Rebate and the rebate Activity

    Args:
        container_id: Container being used
        staff: Staff member processing the rebate

    Returns:
        RebateOutcome with the created Rebate and amount

    Raises:
        ContainerNotFoundError: If container doesn't exist
        ContainerNotRegisteredError: If container has no owner
        MaxUsesReachedError: If the container has no uses left
        StaffWithoutRestaurantError: If staff has no restaurant
        RebateMappingNotFoundError: If no mapping exists for the pair
        LedgerWriteError: If the rebate or activity could not be written
    """
    with transaction.atomic():
        container = registry.lock_container(container_id=container_id)

        if not container.is_registered:
            raise ContainerNotRegisteredError()

        max_uses = container.container_type.max_uses
        if container.has_reached_max_uses:
            raise MaxUsesReachedError(
                max_uses=max_uses,
                current_uses=container.uses_count,
            )

        restaurant = get_staff_restaurant(staff_id=staff.id)
        amount = resolve_rebate_value(
            restaurant_id=restaurant.id,
            container_type_id=container.container_type_id,
        )

        if not registry.increment_uses(container_id=container.id, max_uses=max_uses):
            container.refresh_from_db()
            raise MaxUsesReachedError(
                max_uses=max_uses,
                current_uses=container.uses_count,
            )

        rebate = record_rebate(
            container_id=container.id,
            customer_id=container.customer_id,
            staff_id=staff.id,
            amount=amount,
            location=restaurant.name,
        )
        record_activity(
            user_id=container.customer_id,
            type=ActivityType.REBATE,
            container_id=container.id,
            container_type_id=container.container_type_id,
            restaurant_id=restaurant.id,
            amount=amount,
            location=restaurant.name,
            notes='Rebate processed',
        )

        container.refresh_from_db()

    logger.info(
        "Rebate of %s processed for container %s by staff %s (use %d of %d)",
        amount, container.qr_code, staff.id, container.uses_count, max_uses
    )
    return RebateOutcome(rebate=rebate, amount=amount, container=container)


def process_return(*, container_id: UUID, staff: User) -> Container:
    """
    Mark a registered container as returned at the staff member's restaurant.

    Args:
        container_id: Container being returned
        staff: Staff member receiving it

    Returns:
        Updated Container with status=returned

    Raises:
        ContainerNotFoundError: If container doesn't exist
        ContainerNotRegisteredError: If container has no owner
        ContainerAlreadyReturnedError: If container was already returned
        InvalidContainerStatusError: If the container cannot move to returned
        StaffWithoutRestaurantError: If staff has no restaurant
    """
    with transaction.atomic():
        container = registry.lock_container(container_id=container_id)

        if not container.is_registered:
            raise ContainerNotRegisteredError()

        if not container.can_transition_to(ContainerStatus.RETURNED):
            if container.status == ContainerStatus.RETURNED:
                raise ContainerAlreadyReturnedError()
            raise InvalidContainerStatusError(
                f"Container cannot be returned from status {container.status}"
            )

        restaurant = get_staff_restaurant(staff_id=staff.id)

        returned = registry.set_status(
            container_id=container.id,
            new_status=ContainerStatus.RETURNED,
            expected_statuses=statuses_leading_to(ContainerStatus.RETURNED),
            touch_last_used=True,
        )
        if not returned:
            raise ContainerAlreadyReturnedError()

        record_activity(
            user_id=container.customer_id,
            type=ActivityType.RETURN,
            container_id=container.id,
            container_type_id=container.container_type_id,
            restaurant_id=restaurant.id,
            location=restaurant.name,
            notes='Container returned',
        )

        container.refresh_from_db()

    logger.info(
        "Container %s returned at %s by staff %s", container.qr_code, restaurant.name, staff.id
    )
    return container


def mark_container_status(*, container_id: UUID, status: str, customer: User) -> Container:
    """
    Let a customer report their active container as lost or damaged.

    Args:
        container_id: Container being reported
        status: 'lost' or 'damaged'
        customer: Reporting customer (must own the container)

    Returns:
        Updated Container

    Raises:
        InvalidContainerStatusError: If status is not lost or damaged
        ContainerNotFoundError: If container doesn't exist
        ContainerNotOwnedError: If the caller doesn't own the container
        ContainerNotActiveError: If the container is not active
    """
    if status not in CUSTOMER_REPORTABLE_STATUSES:
        raise InvalidContainerStatusError(
            f"Status must be one of: {', '.join(CUSTOMER_REPORTABLE_STATUSES)}"
        )

    with transaction.atomic():
        container = registry.lock_container(container_id=container_id)

        if container.customer_id != customer.id:
            raise ContainerNotOwnedError()

        if not container.can_transition_to(status):
            raise ContainerNotActiveError(current_status=container.status)

        changed = registry.set_status(
            container_id=container.id,
            new_status=status,
            expected_statuses=statuses_leading_to(status),
            customer_id=customer.id,
        )
        if not changed:
            container.refresh_from_db()
            raise ContainerNotActiveError(current_status=container.status)

        record_activity(
            user_id=customer.id,
            type=ActivityType.STATUS_CHANGE,
            container_id=container.id,
            container_type_id=container.container_type_id,
            restaurant_id=container.restaurant_id,
            notes=f'Container marked as {status}',
        )

        container.refresh_from_db()

    logger.info("Container %s marked as %s by its owner", container.qr_code, status)
    return container
