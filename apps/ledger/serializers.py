from rest_framework import serializers
from .models import Rebate, Activity


# =============================================================================
# Input Serializers
# =============================================================================

class RecentActivityQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for recent activity.

    Query Parameters:
        limit (int): Max number of entries (1-100)
    """

    limit = serializers.IntegerField(required=False, min_value=1, max_value=100)


# =============================================================================
# Output Serializers
# =============================================================================

class RebateSerializer(serializers.ModelSerializer):
    """Rebate record."""

    qr_code = serializers.CharField(source='container.qr_code', read_only=True)

    class Meta:
        model = Rebate
        fields = [
            'id',
            'container',
            'qr_code',
            'customer',
            'staff',
            'amount',
            'location',
            'created_at',
        ]
        read_only_fields = fields


class ActivitySerializer(serializers.ModelSerializer):
    """Activity entry with display names."""

    container_type_name = serializers.SerializerMethodField()
    restaurant_name = serializers.SerializerMethodField()

    class Meta:
        model = Activity
        fields = [
            'id',
            'user',
            'container',
            'container_type',
            'container_type_name',
            'restaurant',
            'restaurant_name',
            'type',
            'amount',
            'location',
            'notes',
            'created_at',
        ]
        read_only_fields = fields

    def get_container_type_name(self, obj):
        return obj.container_type.name if obj.container_type else None

    def get_restaurant_name(self, obj):
        return obj.restaurant.name if obj.restaurant else None


class RebateTotalsSerializer(serializers.Serializer):
    total_rebate_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    rebate_count = serializers.IntegerField()
