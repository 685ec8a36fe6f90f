# ==========================================
# apps/containers/models.py
# ==========================================

from django.db import models
import uuid


class ContainerStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    ACTIVE = 'active', 'Active'
    RETURNED = 'returned', 'Returned'
    LOST = 'lost', 'Lost'
    DAMAGED = 'damaged', 'Damaged'


# Status each state may move to. Rebates keep a container ACTIVE and are
# not listed; returned is terminal.
ALLOWED_TRANSITIONS = {
    ContainerStatus.AVAILABLE: {ContainerStatus.ACTIVE},
    ContainerStatus.ACTIVE: {
        ContainerStatus.RETURNED,
        ContainerStatus.LOST,
        ContainerStatus.DAMAGED,
    },
    ContainerStatus.LOST: {ContainerStatus.RETURNED},
    ContainerStatus.DAMAGED: {ContainerStatus.RETURNED},
    ContainerStatus.RETURNED: set(),
}


def statuses_leading_to(target):
    """Return the statuses from which ``target`` is reachable."""
    target = ContainerStatus(target)
    return [source for source, allowed in ALLOWED_TRANSITIONS.items() if target in allowed]


# Statuses a customer may report on their own active container
CUSTOMER_REPORTABLE_STATUSES = (ContainerStatus.LOST, ContainerStatus.DAMAGED)


class Container(models.Model):
    """
    A physical reusable container identified by its QR code.

    Generated ``available`` with no owner, claimed by exactly one customer
    on registration, then used (each use earns a rebate and increments
    ``uses_count``) until returned, lost or damaged. ``uses_count`` never
    decreases and never exceeds the type's ``max_uses``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    qr_code = models.CharField(max_length=64, unique=True, db_index=True, editable=False)

    container_type = models.ForeignKey(
        'catalog.ContainerType',
        on_delete=models.PROTECT,
        related_name='containers'
    )
    customer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='containers'
    )
    restaurant = models.ForeignKey(
        'catalog.Restaurant',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='containers'
    )

    status = models.CharField(
        max_length=20,
        choices=ContainerStatus.choices,
        default=ContainerStatus.AVAILABLE
    )
    uses_count = models.PositiveIntegerField(default=0)

    registration_date = models.DateTimeField(null=True, blank=True)
    last_used = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'containers'
        indexes = [
            models.Index(fields=['customer', 'status']),
            models.Index(fields=['restaurant', 'status']),
            models.Index(fields=['updated_at']),
        ]
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.qr_code} ({self.status})"

    @property
    def is_registered(self):
        return self.customer_id is not None

    @property
    def remaining_uses(self):
        return max(0, self.container_type.max_uses - self.uses_count)

    @property
    def has_reached_max_uses(self):
        return self.uses_count >= self.container_type.max_uses

    def can_transition_to(self, new_status):
        """Return whether ``new_status`` is reachable from the current status."""
        allowed = ALLOWED_TRANSITIONS[ContainerStatus(self.status)]
        return ContainerStatus(new_status) in allowed
