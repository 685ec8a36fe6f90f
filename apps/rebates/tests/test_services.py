import uuid
import pytest
from decimal import Decimal
from apps.catalog.services import ContainerTypeNotFoundError, RestaurantNotFoundError
from apps.accounts.services import StaffWithoutRestaurantError
from apps.rebates.models import RestaurantContainerRebate
from apps.rebates.services import (
    resolve_rebate_value,
    upsert_rebate_mappings,
    list_rebate_mappings_for_restaurant,
    list_rebate_mappings_for_container_type,
    get_rebate_value_for_staff,
    RebateMappingNotFoundError,
)


@pytest.mark.django_db
class TestResolveRebateValue:

    def test_returns_mapped_value(self, mapping, restaurant, container_type):
        value = resolve_rebate_value(
            restaurant_id=restaurant.id,
            container_type_id=container_type.id,
        )
        assert value == Decimal('1.25')

    def test_missing_mapping_does_not_fall_back_to_type_default(
        self, other_restaurant, container_type, mapping
    ):
        # Small Bowl has a default of 0.50, but Noodle Dock has no mapping
        with pytest.raises(RebateMappingNotFoundError) as exc_info:
            resolve_rebate_value(
                restaurant_id=other_restaurant.id,
                container_type_id=container_type.id,
            )

        assert exc_info.value.kind == 'not_found'
        assert exc_info.value.code == 'rebate_mapping_not_found'


@pytest.mark.django_db
class TestUpsertRebateMappings:

    def test_creates_mappings(self, restaurant, container_type, other_container_type):
        saved = upsert_rebate_mappings(
            restaurant_id=restaurant.id,
            container_type_mappings=[
                {'container_type_id': container_type.id, 'rebate_value': Decimal('1.00')},
                {'container_type_id': other_container_type.id, 'rebate_value': Decimal('0.40')},
            ],
        )

        assert len(saved) == 2
        assert RestaurantContainerRebate.objects.filter(restaurant=restaurant).count() == 2

    def test_overwrites_existing_value(self, mapping, restaurant, container_type):
        upsert_rebate_mappings(
            restaurant_id=restaurant.id,
            container_type_mappings=[
                {'container_type_id': container_type.id, 'rebate_value': Decimal('2.00')},
            ],
        )

        assert RestaurantContainerRebate.objects.filter(
            restaurant=restaurant, container_type=container_type
        ).count() == 1
        assert resolve_rebate_value(
            restaurant_id=restaurant.id, container_type_id=container_type.id
        ) == Decimal('2.00')

    def test_later_duplicate_in_batch_wins(self, restaurant, container_type):
        saved = upsert_rebate_mappings(
            restaurant_id=restaurant.id,
            container_type_mappings=[
                {'container_type_id': container_type.id, 'rebate_value': Decimal('1.00')},
                {'container_type_id': container_type.id, 'rebate_value': Decimal('1.75')},
            ],
        )

        assert len(saved) == 1
        assert resolve_rebate_value(
            restaurant_id=restaurant.id, container_type_id=container_type.id
        ) == Decimal('1.75')

    def test_unknown_container_type_writes_nothing(self, restaurant, container_type):
        missing_id = uuid.uuid4()

        with pytest.raises(ContainerTypeNotFoundError) as exc_info:
            upsert_rebate_mappings(
                restaurant_id=restaurant.id,
                container_type_mappings=[
                    {'container_type_id': container_type.id, 'rebate_value': Decimal('1.00')},
                    {'container_type_id': missing_id, 'rebate_value': Decimal('1.00')},
                ],
            )

        assert exc_info.value.extra['missing_container_type_ids'] == [str(missing_id)]
        assert not RestaurantContainerRebate.objects.exists()

    def test_unknown_restaurant_raises(self, container_type):
        with pytest.raises(RestaurantNotFoundError):
            upsert_rebate_mappings(
                restaurant_id=uuid.uuid4(),
                container_type_mappings=[
                    {'container_type_id': container_type.id, 'rebate_value': Decimal('1.00')},
                ],
            )


@pytest.mark.django_db
class TestMappingListings:

    def test_list_for_restaurant(self, mapping, restaurant, other_restaurant, container_type):
        RestaurantContainerRebate.objects.create(
            restaurant=other_restaurant,
            container_type=container_type,
            rebate_value=Decimal('0.90'),
        )

        mappings = list(list_rebate_mappings_for_restaurant(restaurant_id=restaurant.id))
        assert mappings == [mapping]

    def test_list_for_container_type(self, mapping, other_restaurant, container_type):
        RestaurantContainerRebate.objects.create(
            restaurant=other_restaurant,
            container_type=container_type,
            rebate_value=Decimal('0.90'),
        )

        mappings = list_rebate_mappings_for_container_type(container_type_id=container_type.id)
        assert [m.restaurant.name for m in mappings] == ['Green Bowl', 'Noodle Dock']

    def test_list_for_unknown_restaurant_raises(self):
        with pytest.raises(RestaurantNotFoundError):
            list_rebate_mappings_for_restaurant(restaurant_id=uuid.uuid4())


@pytest.mark.django_db
class TestRebateValueForStaff:

    def test_uses_staff_restaurant(self, mapping, staff, container_type):
        value = get_rebate_value_for_staff(staff_id=staff.id, container_type_id=container_type.id)
        assert value == Decimal('1.25')

    def test_missing_mapping_reports_default(self, other_staff, container_type, mapping):
        with pytest.raises(RebateMappingNotFoundError) as exc_info:
            get_rebate_value_for_staff(
                staff_id=other_staff.id,
                container_type_id=container_type.id,
            )

        assert exc_info.value.extra['default_rebate_value'] == '0.50'

    def test_unaffiliated_staff_raises(self, unaffiliated_staff, container_type):
        with pytest.raises(StaffWithoutRestaurantError):
            get_rebate_value_for_staff(
                staff_id=unaffiliated_staff.id,
                container_type_id=container_type.id,
            )
