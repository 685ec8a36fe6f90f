# ==========================================
# apps/catalog/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Restaurant(models.Model):
    """Partner restaurant where containers are used and returned."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    location = models.CharField(max_length=300, blank=True)
    contact_number = models.CharField(max_length=50, blank=True)
    logo = models.CharField(max_length=300, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurants'
        indexes = [
            models.Index(fields=['name']),
            models.Index(fields=['is_active']),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name


class ContainerType(models.Model):
    """
    Kind of reusable container.

    ``max_uses`` caps how many rebates a single container of this type can
    ever earn. ``rebate_value`` is a suggested default only; rebates are
    always priced from the restaurant-specific mapping.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    image = models.CharField(max_length=300, default='default-container.png')
    rebate_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    max_uses = models.PositiveIntegerField(
        default=10,
        validators=[MinValueValidator(1)]
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'container_types'
        constraints = [
            models.CheckConstraint(
                condition=models.Q(max_uses__gte=1),
                name='container_type_max_uses_positive',
            ),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} (max {self.max_uses} uses)"
