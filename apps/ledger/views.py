from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsCustomer, IsRestaurantStaff
from apps.accounts.services import (
    check_restaurant_access,
    check_user_access,
)
from apps.catalog.services import get_restaurant
from .serializers import (
    RecentActivityQuerySerializer,
    RebateSerializer,
    ActivitySerializer,
    RebateTotalsSerializer,
)
from .services import (
    list_recent_activity,
    list_customer_rebates,
    get_staff_rebate_totals,
    get_restaurant_rebate_totals,
)


@extend_schema(
    parameters=[
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of entries', default=20),
    ],
    responses={200: ActivitySerializer(many=True)},
    description="Get the caller's most recent container activity.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recent_activity(request):
    """Get current user's recent activity - thin HTTP handler."""
    query_serializer = RecentActivityQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    activities = list_recent_activity(
        user_id=request.user.id,
        limit=query_serializer.validated_data.get('limit'),
    )
    return Response(ActivitySerializer(activities, many=True).data)


@extend_schema(
    responses={200: RebateSerializer(many=True)},
    description="Get every rebate the caller has received, newest first.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsCustomer])
def my_rebates(request):
    """Get current customer's rebates."""
    rebates = list_customer_rebates(customer_id=request.user.id)
    return Response(RebateSerializer(rebates, many=True).data)


@extend_schema(
    responses={200: RebateTotalsSerializer},
    description="Get the rebate total processed by a staff member.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def staff_rebate_totals(request, staff_id):
    """Get rebate totals for a staff member."""
    check_user_access(user=request.user, target_user_id=staff_id)

    totals = get_staff_rebate_totals(staff_id=staff_id)
    return Response(RebateTotalsSerializer(totals).data)


@extend_schema(
    responses={200: RebateTotalsSerializer},
    description="Get the rebate total processed by all staff of a restaurant.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def restaurant_rebate_totals(request, restaurant_id):
    """Get rebate totals for a restaurant."""
    get_restaurant(restaurant_id=restaurant_id)
    check_restaurant_access(user=request.user, restaurant_id=restaurant_id)

    totals = get_restaurant_rebate_totals(restaurant_id=restaurant_id)
    return Response(RebateTotalsSerializer(totals).data)
