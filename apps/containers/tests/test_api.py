import re
import uuid
import pytest
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status
from apps.containers.models import Container, ContainerStatus
from apps.ledger.models import Rebate
from apps.ledger.services import LedgerWriteError


# =============================================================================
# End-to-end lifecycle
# =============================================================================

@pytest.mark.django_db
class TestContainerLifecycle:
    """Generate, register, use until the cap, then return."""

    def test_full_lifecycle(
        self, platform_admin_client, customer_client, staff_client,
        container_type, restaurant, mapping
    ):
        # Admin generates
        response = platform_admin_client.post(reverse('containers:container-generate'), {
            'container_type_id': str(container_type.id),
            'restaurant_id': str(restaurant.id),
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        qr_code = response.data['qr_code']
        container_id = response.data['container']['id']
        assert re.match(r'^AQRO-[0-9A-Z]{6}-\d{6}$', qr_code)
        assert response.data['container']['status'] == 'available'

        # Customer registers
        response = customer_client.post(reverse('containers:container-register'), {
            'qr_code': qr_code,
        }, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['container']['status'] == 'active'

        # Staff grants one rebate per allowed use
        for expected_uses in (1, 2, 3):
            response = staff_client.post(reverse('containers:container-rebate'), {
                'container_id': container_id,
            }, format='json')
            assert response.status_code == status.HTTP_201_CREATED
            assert response.data['amount'] == '1.25'
            assert response.data['container']['uses_count'] == expected_uses

        # Fourth use is refused
        response = staff_client.post(reverse('containers:container-rebate'), {
            'container_id': container_id,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'invalid_state'
        assert response.data['code'] == 'max_uses_reached'
        assert response.data['max_uses'] == 3

        # Return, then a second return is refused
        response = staff_client.post(reverse('containers:container-return'), {
            'container_id': container_id,
        }, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'returned'

        response = staff_client.post(reverse('containers:container-return'), {
            'container_id': container_id,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'already_returned'

        # Customer sees the outcome
        response = customer_client.get(reverse('containers:my-stats'))
        assert response.data['returned_containers'] == 1
        assert response.data['total_rebate'] == '3.75'
        assert response.data['rebate_count'] == 3

        response = customer_client.get(reverse('ledger:recent-activity'))
        assert [entry['type'] for entry in response.data][0] == 'return'
        assert len(response.data) == 5


# =============================================================================
# Generation
# =============================================================================

@pytest.mark.django_db
class TestGenerate:
    """Tests for POST /api/containers/generate/"""

    def test_staff_forbidden(self, staff_client, container_type):
        response = staff_client.post(reverse('containers:container-generate'), {
            'container_type_id': str(container_type.id),
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Container.objects.exists()

    def test_unknown_container_type(self, platform_admin_client):
        response = platform_admin_client.post(reverse('containers:container-generate'), {
            'container_type_id': str(uuid.uuid4()),
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'container_type_not_found'

    def test_missing_container_type_id(self, platform_admin_client):
        response = platform_admin_client.post(
            reverse('containers:container-generate'), {}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'container_type_id' in response.data['fields']


# =============================================================================
# Registration
# =============================================================================

@pytest.mark.django_db
class TestRegister:
    """Tests for POST /api/containers/register/"""

    def test_reregister_own_container(self, customer_client, registered_container):
        response = customer_client.post(reverse('containers:container-register'), {
            'qr_code': registered_container.qr_code,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['already_registered'] is True
        assert response.data['owned_by_current_user'] is True

    def test_container_of_another_customer(self, other_customer_client, registered_container):
        response = other_customer_client.post(reverse('containers:container-register'), {
            'qr_code': registered_container.qr_code,
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['success'] is False
        assert response.data['kind'] == 'conflict'
        assert response.data['owned_by_current_user'] is False
        assert 'container' not in response.data

    def test_unknown_qr_code(self, customer_client):
        response = customer_client.post(reverse('containers:container-register'), {
            'qr_code': 'AQRO-NOPE00-000000',
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'

    def test_staff_cannot_register(self, staff_client, container):
        response = staff_client.post(reverse('containers:container-register'), {
            'qr_code': container.qr_code,
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Rebates and returns
# =============================================================================

@pytest.mark.django_db
class TestRebate:
    """Tests for POST /api/containers/rebate/"""

    def test_unregistered_container(self, staff_client, container, mapping):
        response = staff_client.post(reverse('containers:container-rebate'), {
            'container_id': str(container.id),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'container_not_registered'

    def test_missing_mapping(self, other_staff_client, registered_container, mapping):
        response = other_staff_client.post(reverse('containers:container-rebate'), {
            'container_id': str(registered_container.id),
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'rebate_mapping_not_found'
        registered_container.refresh_from_db()
        assert registered_container.uses_count == 0

    def test_customer_forbidden(self, customer_client, registered_container):
        response = customer_client.post(reverse('containers:container-rebate'), {
            'container_id': str(registered_container.id),
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'unauthorized'

    def test_ledger_failure_is_internal_error(self, staff_client, registered_container, mapping):
        with patch(
            'apps.containers.services.workflow.record_rebate',
            side_effect=LedgerWriteError(),
        ):
            response = staff_client.post(reverse('containers:container-rebate'), {
                'container_id': str(registered_container.id),
            }, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['kind'] == 'internal'
        registered_container.refresh_from_db()
        assert registered_container.uses_count == 0
        assert not Rebate.objects.exists()


@pytest.mark.django_db
class TestReturn:
    """Tests for POST /api/containers/return/"""

    def test_unknown_container(self, staff_client):
        response = staff_client.post(reverse('containers:container-return'), {
            'container_id': str(uuid.uuid4()),
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'container_not_found'

    def test_invalid_container_id(self, staff_client):
        response = staff_client.post(reverse('containers:container-return'), {
            'container_id': 'not-a-uuid',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation'


# =============================================================================
# Customer status reports
# =============================================================================

@pytest.mark.django_db
class TestMarkStatus:
    """Tests for POST /api/containers/<id>/status/"""

    def test_owner_marks_damaged(self, customer_client, registered_container):
        url = reverse('containers:container-status', kwargs={'container_id': registered_container.id})
        response = customer_client.post(url, {'status': 'damaged'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'damaged'

    def test_returned_is_not_reportable(self, customer_client, registered_container):
        url = reverse('containers:container-status', kwargs={'container_id': registered_container.id})
        response = customer_client.post(url, {'status': 'returned'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status' in response.data['fields']

    def test_other_customer_forbidden(self, other_customer_client, registered_container):
        url = reverse('containers:container-status', kwargs={'container_id': registered_container.id})
        response = other_customer_client.post(url, {'status': 'lost'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'container_not_owned'
        registered_container.refresh_from_db()
        assert registered_container.status == ContainerStatus.ACTIVE

    def test_not_active(self, customer_client, registered_container):
        url = reverse('containers:container-status', kwargs={'container_id': registered_container.id})
        customer_client.post(url, {'status': 'lost'}, format='json')
        response = customer_client.post(url, {'status': 'damaged'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'container_not_active'


# =============================================================================
# Listings
# =============================================================================

@pytest.mark.django_db
class TestListings:

    def test_my_containers(self, customer_client, other_customer_client, registered_container):
        response = customer_client.get(reverse('containers:my-containers'))
        assert response.status_code == status.HTTP_200_OK
        assert [item['qr_code'] for item in response.data] == [registered_container.qr_code]
        assert response.data[0]['container_type_name'] == 'Small Bowl'

        response = other_customer_client.get(reverse('containers:my-containers'))
        assert response.data == []

    def test_lookup_by_qr(self, staff_client, registered_container):
        response = staff_client.get(
            reverse('containers:container-lookup'),
            {'qr_code': registered_container.qr_code}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(registered_container.id)
        assert response.data['remaining_uses'] == 3
        assert response.data['customer']['email'] == registered_container.customer.email

    def test_lookup_hides_owner_from_other_customers(self, other_customer_client, registered_container):
        response = other_customer_client.get(
            reverse('containers:container-lookup'),
            {'qr_code': registered_container.qr_code}
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'customer' not in response.data
        assert response.data['is_registered'] is True
        assert registered_container.customer.email not in str(response.content)

    def test_lookup_shows_owner_to_owner(self, customer_client, registered_container, customer):
        response = customer_client.get(
            reverse('containers:container-lookup'),
            {'qr_code': registered_container.qr_code}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customer']['id'] == str(customer.id)

    def test_lookup_of_unregistered_container_by_customer(self, customer_client, container):
        response = customer_client.get(
            reverse('containers:container-lookup'),
            {'qr_code': container.qr_code}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_registered'] is False
        assert response.data['status'] == ContainerStatus.AVAILABLE

    def test_lookup_requires_qr_code(self, staff_client):
        response = staff_client.get(reverse('containers:container-lookup'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_restaurant_containers_own_restaurant(self, staff_client, container, restaurant):
        url = reverse('containers:restaurant-containers', kwargs={'restaurant_id': restaurant.id})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1

    def test_restaurant_containers_other_restaurant(self, other_staff_client, container, restaurant):
        url = reverse('containers:restaurant-containers', kwargs={'restaurant_id': restaurant.id})
        response = other_staff_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'unauthorized'

    def test_restaurant_stats(self, staff_client, registered_container, restaurant):
        url = reverse('containers:restaurant-stats', kwargs={'restaurant_id': restaurant.id})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['active_containers'] == 1
        assert response.data['available_containers'] == 0
