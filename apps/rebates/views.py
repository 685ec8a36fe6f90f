from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsPlatformAdmin, IsRestaurantStaff
from .serializers import (
    RebateMappingUpsertInputSerializer,
    RebateMappingSerializer,
    RebateValueSerializer,
)
from .services import (
    upsert_rebate_mappings,
    list_rebate_mappings_for_restaurant,
    list_rebate_mappings_for_container_type,
    get_rebate_value_for_staff,
)


@extend_schema(
    request=RebateMappingUpsertInputSerializer,
    responses={200: RebateMappingSerializer(many=True)},
    description="Create or overwrite a restaurant's rebate values per container type. "
                "Fails without writing anything if any container type is unknown.",
    tags=['rebates'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def upsert_mappings(request):
    """Upsert rebate mappings for a restaurant - thin HTTP handler."""
    input_serializer = RebateMappingUpsertInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    data = input_serializer.validated_data

    mappings = upsert_rebate_mappings(
        restaurant_id=data['restaurant_id'],
        container_type_mappings=data['container_type_mappings'],
    )

    return Response(
        {
            'message': 'Rebate mappings updated successfully',
            'mappings': RebateMappingSerializer(mappings, many=True).data,
        },
        status=status.HTTP_200_OK
    )


@extend_schema(
    responses={200: RebateMappingSerializer(many=True)},
    description="List rebate values configured for a restaurant.",
    tags=['rebates'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def restaurant_mappings(request, restaurant_id):
    """List a restaurant's rebate mappings."""
    mappings = list_rebate_mappings_for_restaurant(restaurant_id=restaurant_id)
    return Response(RebateMappingSerializer(mappings, many=True).data)


@extend_schema(
    responses={200: RebateMappingSerializer(many=True)},
    description="List rebate values for a container type across all restaurants.",
    tags=['rebates'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def container_type_mappings(request, container_type_id):
    """List a container type's rebate mappings."""
    mappings = list_rebate_mappings_for_container_type(container_type_id=container_type_id)
    return Response(RebateMappingSerializer(mappings, many=True).data)


@extend_schema(
    responses={200: RebateValueSerializer},
    description="Get the rebate value for a container type at the caller's restaurant.",
    tags=['rebates'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def rebate_value(request, container_type_id):
    """Get rebate value at the staff member's restaurant."""
    value = get_rebate_value_for_staff(
        staff_id=request.user.id,
        container_type_id=container_type_id,
    )
    serializer = RebateValueSerializer({
        'container_type_id': container_type_id,
        'rebate_value': value,
    })
    return Response(serializer.data)
