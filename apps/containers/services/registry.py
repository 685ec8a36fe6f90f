"""
Container registry.

Owns QR code generation and the guarded writes behind every status
change. Each write is a conditional UPDATE that only matches rows still
in the expected state, so two racing requests cannot both win even when
the row lock is unavailable (SQLite ignores SELECT ... FOR UPDATE).
"""

import logging
import secrets
import string
import time
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.catalog.models import ContainerType, Restaurant

from ..models import Container, ContainerStatus
from .exceptions import ContainerNotFoundError, QrCodeGenerationError

logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_uppercase
QR_RANDOM_LENGTH = 6
QR_TIME_SUFFIX_LENGTH = 6


def generate_qr_code(*, prefix: Optional[str] = None) -> str:
    """
    Build a QR code string.

    Format: ``<PREFIX>-<6 random base36 chars>-<last 6 digits of ms timestamp>``,
    e.g. ``AQRO-7K2Q9Z-483920``.
    """
    prefix = prefix or settings.AQRO_QR_PREFIX
    random_part = ''.join(
        secrets.choice(BASE36_ALPHABET) for _ in range(QR_RANDOM_LENGTH)
    )
    time_part = str(int(time.time() * 1000))[-QR_TIME_SUFFIX_LENGTH:]
    return f"{prefix}-{random_part}-{time_part}"


def create_container(
    *,
    container_type: ContainerType,
    restaurant: Optional[Restaurant] = None,
    max_retries: Optional[int] = None
) -> Container:
    """
    Insert a new available container under a fresh QR code.

    The unique constraint on ``qr_code`` is the collision check: on
    IntegrityError a new code is drawn and the insert retried.

    Args:
        container_type: Type of the new container
        restaurant: Restaurant the container is issued for (optional)
        max_retries: Attempts before giving up (defaults to AQRO_QR_MAX_RETRIES)

    Returns:
        Created Container

    Raises:
        QrCodeGenerationError: If every attempt collided
    """
    if max_retries is None:
        max_retries = settings.AQRO_QR_MAX_RETRIES

    for attempt in range(max_retries):
        qr_code = generate_qr_code()

        try:
            # Each attempt is a separate savepoint
            with transaction.atomic():
                return Container.objects.create(
                    qr_code=qr_code,
                    container_type=container_type,
                    restaurant=restaurant,
                    status=ContainerStatus.AVAILABLE,
                )
        except IntegrityError:
            logger.warning(
                "QR code collision on %s (attempt %d of %d)", qr_code, attempt + 1, max_retries
            )
            continue

    raise QrCodeGenerationError(
        f"Failed to generate unique QR code after {max_retries} attempts"
    )


def lock_container(*, container_id: UUID) -> Container:
    """
    Load a container for update, with its type and owner.

    Must be called inside a transaction.

    Raises:
        ContainerNotFoundError: If container doesn't exist
    """
    try:
        return (
            Container.objects
            .select_for_update()
            .select_related('container_type', 'customer', 'restaurant')
            .get(id=container_id)
        )
    except Container.DoesNotExist:
        raise ContainerNotFoundError(f"Container {container_id} not found")


def lock_container_by_qr(*, qr_code: str) -> Container:
    """
    Load a container for update by its QR code.

    Raises:
        ContainerNotFoundError: If no container has this code
    """
    try:
        return (
            Container.objects
            .select_for_update()
            .select_related('container_type', 'customer', 'restaurant')
            .get(qr_code=qr_code)
        )
    except Container.DoesNotExist:
        raise ContainerNotFoundError(f"Container with QR code {qr_code} not found")


def get_container_by_qr(*, qr_code: str) -> Container:
    """
    Get container details by QR code.

    Raises:
        ContainerNotFoundError: If no container has this code
    """
    try:
        return (
            Container.objects
            .select_related('container_type', 'customer', 'restaurant')
            .get(qr_code=qr_code)
        )
    except Container.DoesNotExist:
        raise ContainerNotFoundError(f"Container with QR code {qr_code} not found")


def claim_ownership(*, container_id: UUID, customer_id: UUID) -> bool:
    """
    Assign an owner if the container is still unowned and available.

    Returns:
        True if this call claimed the container, False if someone else
        already owns it
    """
    now = timezone.now()
    claimed = (
        Container.objects
        .filter(
            id=container_id,
            customer__isnull=True,
            status=ContainerStatus.AVAILABLE,
        )
        .update(
            customer_id=customer_id,
            status=ContainerStatus.ACTIVE,
            registration_date=now,
            updated_at=now,
        )
    )
    return claimed == 1


def increment_uses(*, container_id: UUID, max_uses: int) -> bool:
    """
    Count one use if the container still has uses left.

    Returns:
        True if ``uses_count`` was incremented, False if the cap was reached
    """
    now = timezone.now()
    incremented = (
        Container.objects
        .filter(id=container_id, uses_count__lt=max_uses)
        .update(
            uses_count=F('uses_count') + 1,
            last_used=now,
            updated_at=now,
        )
    )
    return incremented == 1


def set_status(
    *,
    container_id: UUID,
    new_status: str,
    expected_statuses: Iterable[str],
    customer_id: Optional[UUID] = None,
    touch_last_used: bool = False
) -> bool:
    """
    Move a container to ``new_status`` if it is in one of ``expected_statuses``.

    Args:
        container_id: Container to update
        new_status: Target status
        expected_statuses: Statuses the container must currently have
        customer_id: If given, the container must also be owned by this customer
        touch_last_used: Also stamp ``last_used``

    Returns:
        True if the row was updated
    """
    now = timezone.now()
    filters = {
        'id': container_id,
        'customer__isnull': False,
        'status__in': list(expected_statuses),
    }
    if customer_id is not None:
        filters['customer_id'] = customer_id

    changes = {'status': new_status, 'updated_at': now}
    if touch_last_used:
        changes['last_used'] = now

    return Container.objects.filter(**filters).update(**changes) == 1
