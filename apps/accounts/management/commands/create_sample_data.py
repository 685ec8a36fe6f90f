"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --containers 10

This creates (idempotently):
- 2 restaurants
- 3 container types
- 1 admin, 1 staff member per restaurant, 2 customers
- Rebate mappings for every (restaurant, container type) pair
- A batch of unregistered containers per restaurant

Ledger entries are append-only, so nothing is ever cleared.
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.catalog.models import Restaurant, ContainerType
from apps.containers.services import generate_container
from apps.rebates.services import upsert_rebate_mappings


RESTAURANTS = [
    {'name': 'Green Bowl', 'location': 'Main Street 12', 'contact_number': '+1 555 0101'},
    {'name': 'Noodle Dock', 'location': 'Harbour Road 4', 'contact_number': '+1 555 0102'},
]

CONTAINER_TYPES = [
    {
        'name': 'Small Bowl',
        'description': '500 ml bowl for soups and salads',
        'price': Decimal('3.50'),
        'rebate_value': Decimal('0.50'),
        'max_uses': 50,
    },
    {
        'name': 'Large Box',
        'description': '1 l box for main dishes',
        'price': Decimal('4.50'),
        'rebate_value': Decimal('0.75'),
        'max_uses': 40,
    },
    {
        'name': 'Cup',
        'description': '350 ml cup for hot drinks',
        'price': Decimal('2.00'),
        'rebate_value': Decimal('0.25'),
        'max_uses': 100,
    },
]

# Per-restaurant multiplier applied to each type's suggested rebate
RESTAURANT_REBATE_FACTORS = {
    'Green Bowl': Decimal('1.00'),
    'Noodle Dock': Decimal('1.20'),
}


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--containers',
            type=int,
            default=5,
            help='Number of containers to generate per restaurant',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating sample data...')

        restaurants = self.create_restaurants()
        container_types = self.create_container_types()
        self.create_users(restaurants)
        self.create_mappings(restaurants, container_types)
        self.create_containers(restaurants, container_types, options['containers'])

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (admin, superuser)')
        self.stdout.write('  staff.greenbowl@example.com / password123 (staff)')
        self.stdout.write('  staff.noodledock@example.com / password123 (staff)')
        self.stdout.write('  alice@example.com / password123 (customer)')
        self.stdout.write('  bob@example.com / password123 (customer)')

    def create_restaurants(self):
        self.stdout.write('  Creating restaurants...')

        restaurants = {}
        for data in RESTAURANTS:
            restaurant, _ = Restaurant.objects.get_or_create(
                name=data['name'],
                defaults=data,
            )
            restaurants[restaurant.name] = restaurant
        return restaurants

    def create_container_types(self):
        self.stdout.write('  Creating container types...')

        container_types = {}
        for data in CONTAINER_TYPES:
            container_type, _ = ContainerType.objects.get_or_create(
                name=data['name'],
                defaults=data,
            )
            container_types[container_type.name] = container_type
        return container_types

    def _get_or_create_user(self, email, password, **fields):
        user = User.objects.filter(email=email).first()
        if user is None:
            user = User.objects.create_user(email=email, password=password, **fields)
        return user

    def create_users(self, restaurants):
        """Create one admin, one staff member per restaurant and two customers."""
        self.stdout.write('  Creating users...')

        admin = User.objects.filter(email='admin@example.com').first()
        if admin is None:
            User.objects.create_superuser(
                email='admin@example.com',
                password='admin123',
                first_name='Admin',
                last_name='User',
            )

        for restaurant in restaurants.values():
            slug = restaurant.name.lower().replace(' ', '')
            self._get_or_create_user(
                f'staff.{slug}@example.com',
                'password123',
                first_name='Staff',
                last_name=restaurant.name,
                user_type=UserRole.STAFF,
                restaurant=restaurant,
            )

        self._get_or_create_user(
            'alice@example.com', 'password123', first_name='Alice', last_name='Green',
        )
        self._get_or_create_user(
            'bob@example.com', 'password123', first_name='Bob', last_name='Reuse',
        )

    def create_mappings(self, restaurants, container_types):
        self.stdout.write('  Creating rebate mappings...')

        for name, restaurant in restaurants.items():
            factor = RESTAURANT_REBATE_FACTORS.get(name, Decimal('1.00'))
            upsert_rebate_mappings(
                restaurant_id=restaurant.id,
                container_type_mappings=[
                    {
                        'container_type_id': container_type.id,
                        'rebate_value': (container_type.rebate_value * factor).quantize(Decimal('0.01')),
                    }
                    for container_type in container_types.values()
                ],
            )

    def create_containers(self, restaurants, container_types, count):
        self.stdout.write(f'  Generating {count} container(s) per restaurant...')

        types = list(container_types.values())
        for restaurant in restaurants.values():
            for index in range(count):
                container = generate_container(
                    container_type_id=types[index % len(types)].id,
                    restaurant_id=restaurant.id,
                )
                self.stdout.write(f'    {restaurant.name}: {container.qr_code}')
