"""
Append-only ledgers: rebates granted and container lifecycle activity.

Rows are inserted once and never changed. Updates and deletes are refused
at the instance and queryset level.
"""

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class LedgerImmutableError(Exception):
    """Raised on any attempt to change or remove a ledger entry."""
    pass


class AppendOnlyQuerySet(models.QuerySet):

    def update(self, **kwargs):
        raise LedgerImmutableError(f"{self.model.__name__} entries cannot be updated")

    def delete(self):
        raise LedgerImmutableError(f"{self.model.__name__} entries cannot be deleted")


class AppendOnlyModel(models.Model):
    """Base for models whose rows may only be inserted."""

    objects = AppendOnlyQuerySet.as_manager()

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise LedgerImmutableError(f"{type(self).__name__} entries cannot be updated")
        kwargs['force_insert'] = True
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise LedgerImmutableError(f"{type(self).__name__} entries cannot be deleted")


class ActivityType(models.TextChoices):
    REGISTRATION = 'registration', 'Registration'
    REBATE = 'rebate', 'Rebate'
    RETURN = 'return', 'Return'
    STATUS_CHANGE = 'status_change', 'Status Change'


class Rebate(AppendOnlyModel):
    """
    A rebate granted to a customer for one use of a container.

    ``amount`` and ``location`` are snapshots taken when the rebate was
    processed; later mapping or restaurant edits do not touch them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    container = models.ForeignKey(
        'containers.Container',
        on_delete=models.PROTECT,
        related_name='rebates'
    )
    customer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='rebates_received'
    )
    staff = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='rebates_processed'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    location = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'rebates'
        indexes = [
            models.Index(fields=['customer', 'created_at']),
            models.Index(fields=['staff', 'created_at']),
            models.Index(fields=['container']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.amount} to {self.customer_id} at {self.location or 'unknown'}"


class Activity(AppendOnlyModel):
    """Audit entry for one container lifecycle event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='activities'
    )
    container = models.ForeignKey(
        'containers.Container',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='activities'
    )
    container_type = models.ForeignKey(
        'catalog.ContainerType',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='activities'
    )
    restaurant = models.ForeignKey(
        'catalog.Restaurant',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='activities'
    )
    type = models.CharField(max_length=20, choices=ActivityType.choices)
    amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    location = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'activities'
        verbose_name_plural = 'activities'
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['container', 'created_at']),
            models.Index(fields=['restaurant', 'created_at']),
            models.Index(fields=['type']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_type_display()} by {self.user_id} on {self.created_at:%Y-%m-%d}"
