from decimal import Decimal
from rest_framework import serializers
from .models import RestaurantContainerRebate


# =============================================================================
# Input Serializers
# =============================================================================

class ContainerTypeMappingInputSerializer(serializers.Serializer):
    """One container type's rebate value inside an upsert batch."""

    container_type_id = serializers.UUIDField()
    rebate_value = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00')
    )


class RebateMappingUpsertInputSerializer(serializers.Serializer):
    """
    Validate a rebate mapping upsert request.

    Body:
        restaurant_id (UUID): Restaurant the values apply to
        container_type_mappings (list): ``[{container_type_id, rebate_value}]``
    """

    restaurant_id = serializers.UUIDField()
    container_type_mappings = ContainerTypeMappingInputSerializer(
        many=True,
        allow_empty=False
    )


# =============================================================================
# Output Serializers
# =============================================================================

class RebateMappingSerializer(serializers.ModelSerializer):
    """Rebate mapping joined with display names."""

    restaurant_name = serializers.CharField(source='restaurant.name', read_only=True)
    container_type_name = serializers.CharField(source='container_type.name', read_only=True)

    class Meta:
        model = RestaurantContainerRebate
        fields = [
            'id',
            'restaurant',
            'restaurant_name',
            'container_type',
            'container_type_name',
            'rebate_value',
            'updated_at',
        ]
        read_only_fields = fields


class RebateValueSerializer(serializers.Serializer):
    container_type_id = serializers.UUIDField()
    rebate_value = serializers.DecimalField(max_digits=10, decimal_places=2)
