from rest_framework import serializers
from .models import Restaurant, ContainerType


class RestaurantSerializer(serializers.ModelSerializer):
    """Restaurant display serializer."""

    class Meta:
        model = Restaurant
        fields = [
            'id',
            'name',
            'location',
            'contact_number',
            'logo',
            'is_active',
        ]
        read_only_fields = fields


class RestaurantMinimalSerializer(serializers.ModelSerializer):
    """Minimal restaurant info for nesting."""

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'location']
        read_only_fields = fields


class ContainerTypeSerializer(serializers.ModelSerializer):
    """Container type display serializer."""

    class Meta:
        model = ContainerType
        fields = [
            'id',
            'name',
            'description',
            'price',
            'image',
            'rebate_value',
            'max_uses',
            'is_active',
        ]
        read_only_fields = fields
