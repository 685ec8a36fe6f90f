import uuid
import pytest
from django.urls import reverse
from rest_framework import status
from apps.rebates.models import RestaurantContainerRebate


@pytest.mark.django_db
class TestUpsertMappings:
    """Tests for POST /api/rebates/mappings/"""

    def test_admin_upserts_mappings(self, platform_admin_client, restaurant, container_type):
        url = reverse('rebates:mapping-upsert')
        response = platform_admin_client.post(url, {
            'restaurant_id': str(restaurant.id),
            'container_type_mappings': [
                {'container_type_id': str(container_type.id), 'rebate_value': '1.50'},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Rebate mappings updated successfully'
        assert response.data['mappings'][0]['rebate_value'] == '1.50'
        assert response.data['mappings'][0]['restaurant_name'] == 'Green Bowl'

    def test_unknown_container_type_returns_not_found(
        self, platform_admin_client, restaurant, container_type
    ):
        missing_id = str(uuid.uuid4())
        url = reverse('rebates:mapping-upsert')
        response = platform_admin_client.post(url, {
            'restaurant_id': str(restaurant.id),
            'container_type_mappings': [
                {'container_type_id': str(container_type.id), 'rebate_value': '1.50'},
                {'container_type_id': missing_id, 'rebate_value': '1.50'},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'
        assert response.data['missing_container_type_ids'] == [missing_id]
        assert not RestaurantContainerRebate.objects.exists()

    def test_negative_value_rejected(self, platform_admin_client, restaurant, container_type):
        url = reverse('rebates:mapping-upsert')
        response = platform_admin_client.post(url, {
            'restaurant_id': str(restaurant.id),
            'container_type_mappings': [
                {'container_type_id': str(container_type.id), 'rebate_value': '-1.00'},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation'

    def test_empty_batch_rejected(self, platform_admin_client, restaurant):
        url = reverse('rebates:mapping-upsert')
        response = platform_admin_client.post(url, {
            'restaurant_id': str(restaurant.id),
            'container_type_mappings': [],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_staff_cannot_upsert(self, staff_client, restaurant, container_type):
        url = reverse('rebates:mapping-upsert')
        response = staff_client.post(url, {
            'restaurant_id': str(restaurant.id),
            'container_type_mappings': [
                {'container_type_id': str(container_type.id), 'rebate_value': '9.99'},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'unauthorized'


@pytest.mark.django_db
class TestMappingListings:

    def test_restaurant_mappings(self, platform_admin_client, mapping, restaurant):
        url = reverse('rebates:restaurant-mappings', kwargs={'restaurant_id': restaurant.id})
        response = platform_admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['container_type_name'] == 'Small Bowl'

    def test_container_type_mappings(self, platform_admin_client, mapping, container_type):
        url = reverse(
            'rebates:container-type-mappings',
            kwargs={'container_type_id': container_type.id}
        )
        response = platform_admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['rebate_value'] == '1.25'

    def test_unknown_restaurant_returns_not_found(self, platform_admin_client):
        url = reverse('rebates:restaurant-mappings', kwargs={'restaurant_id': uuid.uuid4()})
        response = platform_admin_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestRebateValue:
    """Tests for GET /api/rebates/value/<container_type_id>/"""

    def test_staff_gets_value_for_own_restaurant(self, staff_client, mapping, container_type):
        url = reverse('rebates:rebate-value', kwargs={'container_type_id': container_type.id})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rebate_value'] == '1.25'

    def test_missing_mapping_shows_default(self, other_staff_client, mapping, container_type):
        url = reverse('rebates:rebate-value', kwargs={'container_type_id': container_type.id})
        response = other_staff_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'rebate_mapping_not_found'
        assert response.data['default_rebate_value'] == '0.50'

    def test_customer_forbidden(self, customer_client, container_type):
        url = reverse('rebates:rebate-value', kwargs={'container_type_id': container_type.id})
        response = customer_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
