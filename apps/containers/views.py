from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsCustomer, IsPlatformAdmin, IsRestaurantStaff
from apps.ledger.serializers import RebateSerializer
from .serializers import (
    GenerateContainerInputSerializer,
    RegisterContainerInputSerializer,
    ContainerActionInputSerializer,
    ContainerStatusInputSerializer,
    QrLookupQuerySerializer,
    ContainerSerializer,
    ContainerLookupSerializer,
    ContainerListSerializer,
    GenerateContainerResponseSerializer,
    RegistrationResponseSerializer,
    RebateResponseSerializer,
    CustomerContainerStatsSerializer,
    RestaurantContainerStatsSerializer,
)
from .services import (
    generate_container,
    register_container,
    process_rebate,
    process_return,
    mark_container_status,
    get_container_by_qr,
    get_customer_container_stats,
    get_restaurant_container_stats,
    list_customer_containers,
    list_restaurant_containers,
)


# =============================================================================
# Admin
# =============================================================================

@extend_schema(
    request=GenerateContainerInputSerializer,
    responses={201: GenerateContainerResponseSerializer},
    description="Create a new unowned container with a unique QR code.",
    tags=['containers'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def generate(request):
    """Generate a container - thin HTTP handler."""
    input_serializer = GenerateContainerInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    data = input_serializer.validated_data

    container = generate_container(
        container_type_id=data['container_type_id'],
        restaurant_id=data.get('restaurant_id'),
    )

    return Response(
        {
            'container': ContainerSerializer(container).data,
            'qr_code': container.qr_code,
        },
        status=status.HTTP_201_CREATED
    )


# =============================================================================
# Customer
# =============================================================================

@extend_schema(
    request=RegisterContainerInputSerializer,
    responses={200: RegistrationResponseSerializer, 409: RegistrationResponseSerializer},
    description="Register a scanned container to the caller. Re-registering your own "
                "container succeeds; a container owned by someone else returns 409.",
    tags=['containers'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsCustomer])
def register(request):
    """Register a container by QR code."""
    input_serializer = RegisterContainerInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    outcome = register_container(
        qr_code=input_serializer.validated_data['qr_code'],
        customer=request.user,
    )

    body = {
        'success': outcome.success,
        'message': outcome.message,
        'already_registered': outcome.already_registered,
        'owned_by_current_user': outcome.owned_by_current_user,
    }
    if outcome.container is not None:
        body['container'] = ContainerSerializer(outcome.container).data

    if not outcome.success:
        body.update({'error': outcome.message, 'kind': 'conflict', 'code': 'already_registered'})
        return Response(body, status=status.HTTP_409_CONFLICT)

    return Response(body, status=status.HTTP_200_OK)


@extend_schema(
    request=ContainerStatusInputSerializer,
    responses={200: ContainerSerializer},
    description="Report your own active container as lost or damaged.",
    tags=['containers'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsCustomer])
def mark_status(request, container_id):
    """Mark a container as lost or damaged."""
    input_serializer = ContainerStatusInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    container = mark_container_status(
        container_id=container_id,
        status=input_serializer.validated_data['status'],
        customer=request.user,
    )
    return Response(ContainerSerializer(container).data)


@extend_schema(
    responses={200: ContainerListSerializer(many=True)},
    description="List the caller's containers, most recently updated first.",
    tags=['containers'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsCustomer])
def my_containers(request):
    containers = list_customer_containers(customer_id=request.user.id)
    return Response(ContainerListSerializer(containers, many=True).data)


@extend_schema(
    responses={200: CustomerContainerStatsSerializer},
    description="Get the caller's container counts and rebate total.",
    tags=['containers'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsCustomer])
def my_stats(request):
    stats = get_customer_container_stats(customer_id=request.user.id)
    return Response(CustomerContainerStatsSerializer(stats).data)


@extend_schema(
    parameters=[
        OpenApiParameter('qr_code', OpenApiTypes.STR, description='Scanned QR code', required=True),
    ],
    responses={200: ContainerSerializer},
    description=(
        "Look up a container by its QR code. Customers scanning a container "
        "they do not own get it without owner details."
    ),
    tags=['containers'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def container_by_qr(request):
    """Look up a container by QR code."""
    query_serializer = QrLookupQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    container = get_container_by_qr(qr_code=query_serializer.validated_data['qr_code'])
    if request.user.is_customer and container.customer_id != request.user.id:
        return Response(ContainerLookupSerializer(container).data)
    return Response(ContainerSerializer(container).data)


# =============================================================================
# Restaurant staff
# =============================================================================

@extend_schema(
    request=ContainerActionInputSerializer,
    responses={201: RebateResponseSerializer},
    description="Grant a rebate for one use of a registered container, at the rate "
                "configured for the caller's restaurant.",
    tags=['containers'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def rebate(request):
    """Process a rebate - thin HTTP handler."""
    input_serializer = ContainerActionInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    outcome = process_rebate(
        container_id=input_serializer.validated_data['container_id'],
        staff=request.user,
    )

    return Response(
        {
            'success': True,
            'message': 'Rebate processed successfully',
            'amount': str(outcome.amount),
            'rebate': RebateSerializer(outcome.rebate).data,
            'container': ContainerSerializer(outcome.container).data,
        },
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    request=ContainerActionInputSerializer,
    responses={200: ContainerSerializer},
    description="Mark a registered container as returned.",
    tags=['containers'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def return_container(request):
    """Process a container return."""
    input_serializer = ContainerActionInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    container = process_return(
        container_id=input_serializer.validated_data['container_id'],
        staff=request.user,
    )
    return Response(ContainerSerializer(container).data)


@extend_schema(
    responses={200: ContainerListSerializer(many=True)},
    description="List containers issued for a restaurant.",
    tags=['containers'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def restaurant_containers(request, restaurant_id):
    containers = list_restaurant_containers(restaurant_id=restaurant_id, user=request.user)
    return Response(ContainerListSerializer(containers, many=True).data)


@extend_schema(
    responses={200: RestaurantContainerStatsSerializer},
    description="Count a restaurant's containers by status.",
    tags=['containers'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsRestaurantStaff])
def restaurant_stats(request, restaurant_id):
    stats = get_restaurant_container_stats(restaurant_id=restaurant_id, user=request.user)
    return Response(RestaurantContainerStatsSerializer(stats).data)
