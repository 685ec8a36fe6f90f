"""
Fixtures shared by every app's tests.

One restaurant-affiliated staff member per restaurant, two customers, an
admin, and a container type with a small ``max_uses`` so limits are easy to
reach.
"""

import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.catalog.models import Restaurant, ContainerType
from apps.rebates.models import RestaurantContainerRebate
from apps.containers.services import register_container
from apps.containers.services.registry import create_container


def client_for(user):
    """Return an API client authenticated as ``user`` via JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Catalog
# =============================================================================

@pytest.fixture
def restaurant(db):
    return Restaurant.objects.create(
        name='Green Bowl',
        location='Main Street 12',
        contact_number='+1 555 0101',
    )


@pytest.fixture
def other_restaurant(db):
    return Restaurant.objects.create(
        name='Noodle Dock',
        location='Harbour Road 4',
    )


@pytest.fixture
def container_type(db):
    """Container type that allows three uses."""
    return ContainerType.objects.create(
        name='Small Bowl',
        description='500 ml bowl',
        price=Decimal('3.50'),
        rebate_value=Decimal('0.50'),
        max_uses=3,
    )


@pytest.fixture
def other_container_type(db):
    return ContainerType.objects.create(
        name='Cup',
        price=Decimal('2.00'),
        rebate_value=None,
        max_uses=10,
    )


@pytest.fixture
def mapping(restaurant, container_type):
    """Green Bowl pays 1.25 per Small Bowl use."""
    return RestaurantContainerRebate.objects.create(
        restaurant=restaurant,
        container_type=container_type,
        rebate_value=Decimal('1.25'),
    )


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def customer(db):
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        first_name='Alice',
        last_name='Green',
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        first_name='Bob',
    )


@pytest.fixture
def staff(restaurant):
    return User.objects.create_user(
        email='staff@greenbowl.example.com',
        password='TestPass123!',
        first_name='Sam',
        user_type=UserRole.STAFF,
        restaurant=restaurant,
    )


@pytest.fixture
def colleague(restaurant):
    """Second staff member at the same restaurant."""
    return User.objects.create_user(
        email='colleague@greenbowl.example.com',
        password='TestPass123!',
        user_type=UserRole.STAFF,
        restaurant=restaurant,
    )


@pytest.fixture
def other_staff(other_restaurant):
    return User.objects.create_user(
        email='staff@noodledock.example.com',
        password='TestPass123!',
        user_type=UserRole.STAFF,
        restaurant=other_restaurant,
    )


@pytest.fixture
def unaffiliated_staff(db):
    return User.objects.create_user(
        email='floating@example.com',
        password='TestPass123!',
        user_type=UserRole.STAFF,
    )


@pytest.fixture
def platform_admin(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        user_type=UserRole.ADMIN,
    )


@pytest.fixture
def customer_client(customer):
    return client_for(customer)


@pytest.fixture
def other_customer_client(other_customer):
    return client_for(other_customer)


@pytest.fixture
def staff_client(staff):
    return client_for(staff)


@pytest.fixture
def other_staff_client(other_staff):
    return client_for(other_staff)


@pytest.fixture
def platform_admin_client(platform_admin):
    return client_for(platform_admin)


# =============================================================================
# Containers
# =============================================================================

@pytest.fixture
def container(container_type, restaurant):
    """Freshly generated, unowned container."""
    return create_container(container_type=container_type, restaurant=restaurant)


@pytest.fixture
def registered_container(container, customer):
    """Container registered to ``customer`` and active."""
    outcome = register_container(qr_code=container.qr_code, customer=customer)
    return outcome.container
