from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .serializers import RestaurantSerializer, ContainerTypeSerializer
from .services import get_active_restaurants, get_active_container_types


@extend_schema(
    responses={200: ContainerTypeSerializer(many=True)},
    description="List active container types.",
    tags=['catalog'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def container_type_list(request):
    """List active container types."""
    serializer = ContainerTypeSerializer(get_active_container_types(), many=True)
    return Response(serializer.data)


@extend_schema(
    responses={200: RestaurantSerializer(many=True)},
    description="List active partner restaurants.",
    tags=['catalog'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def restaurant_list(request):
    """List active restaurants."""
    serializer = RestaurantSerializer(get_active_restaurants(), many=True)
    return Response(serializer.data)
