from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class RestaurantContainerRebate(models.Model):
    """
    Rebate paid at one restaurant for one container type.

    This is the only source of rebate amounts. There is at most one row per
    (restaurant, container type); saving the same pair again overwrites the
    value.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(
        'catalog.Restaurant',
        on_delete=models.CASCADE,
        related_name='rebate_mappings'
    )
    container_type = models.ForeignKey(
        'catalog.ContainerType',
        on_delete=models.CASCADE,
        related_name='rebate_mappings'
    )
    rebate_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurant_container_rebates'
        constraints = [
            models.UniqueConstraint(
                fields=['restaurant', 'container_type'],
                name='unique_restaurant_container_type_rebate',
            ),
        ]
        indexes = [
            models.Index(fields=['container_type']),
        ]
        ordering = ['restaurant__name', 'container_type__name']

    def __str__(self):
        return f"{self.restaurant} / {self.container_type.name}: {self.rebate_value}"
