from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from apps.catalog.serializers import ContainerTypeSerializer, RestaurantMinimalSerializer
from apps.ledger.serializers import RebateSerializer
from .models import Container, CUSTOMER_REPORTABLE_STATUSES


# =============================================================================
# Input Serializers
# =============================================================================

class GenerateContainerInputSerializer(serializers.Serializer):
    """
    Validate a container generation request.

    Body:
        container_type_id (UUID): Type of container to create
        restaurant_id (UUID, optional): Restaurant the container is issued for
    """

    container_type_id = serializers.UUIDField()
    restaurant_id = serializers.UUIDField(required=False, allow_null=True)


class RegisterContainerInputSerializer(serializers.Serializer):
    qr_code = serializers.CharField(max_length=64, trim_whitespace=True)


class ContainerActionInputSerializer(serializers.Serializer):
    """Body for staff actions (rebate, return) on one container."""

    container_id = serializers.UUIDField()


class ContainerStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[
        (status.value, status.label) for status in CUSTOMER_REPORTABLE_STATUSES
    ])


class QrLookupQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for QR lookup.

    Query Parameters:
        qr_code (str): Scanned QR code
    """

    qr_code = serializers.CharField(max_length=64, trim_whitespace=True)


# =============================================================================
# Output Serializers
# =============================================================================

class ContainerSerializer(serializers.ModelSerializer):
    """Full container detail."""

    container_type = ContainerTypeSerializer(read_only=True)
    customer = UserMinimalSerializer(read_only=True)
    restaurant = RestaurantMinimalSerializer(read_only=True)
    remaining_uses = serializers.IntegerField(read_only=True)

    class Meta:
        model = Container
        fields = [
            'id',
            'qr_code',
            'container_type',
            'customer',
            'restaurant',
            'status',
            'uses_count',
            'remaining_uses',
            'registration_date',
            'last_used',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ContainerLookupSerializer(ContainerSerializer):
    """Container detail for customers scanning a code they do not own."""

    customer = None
    is_registered = serializers.BooleanField(read_only=True)

    class Meta(ContainerSerializer.Meta):
        fields = [
            field for field in ContainerSerializer.Meta.fields if field != 'customer'
        ] + ['is_registered']
        read_only_fields = fields


class ContainerListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    container_type_name = serializers.CharField(source='container_type.name', read_only=True)
    max_uses = serializers.IntegerField(source='container_type.max_uses', read_only=True)
    restaurant_name = serializers.SerializerMethodField()

    class Meta:
        model = Container
        fields = [
            'id',
            'qr_code',
            'container_type',
            'container_type_name',
            'restaurant',
            'restaurant_name',
            'customer',
            'status',
            'uses_count',
            'max_uses',
            'registration_date',
            'last_used',
            'updated_at',
        ]
        read_only_fields = fields

    def get_restaurant_name(self, obj):
        return obj.restaurant.name if obj.restaurant else None


class GenerateContainerResponseSerializer(serializers.Serializer):
    container = ContainerSerializer()
    qr_code = serializers.CharField()


class RegistrationResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    already_registered = serializers.BooleanField()
    owned_by_current_user = serializers.BooleanField()
    container = ContainerSerializer(required=False)


class RebateResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    rebate = RebateSerializer()
    container = ContainerSerializer()


class CustomerContainerStatsSerializer(serializers.Serializer):
    active_containers = serializers.IntegerField()
    returned_containers = serializers.IntegerField()
    lost_containers = serializers.IntegerField()
    damaged_containers = serializers.IntegerField()
    total_rebate = serializers.DecimalField(max_digits=12, decimal_places=2)
    rebate_count = serializers.IntegerField()


class RestaurantContainerStatsSerializer(serializers.Serializer):
    available_containers = serializers.IntegerField()
    active_containers = serializers.IntegerField()
    returned_containers = serializers.IntegerField()
