"""
Django Management Command: Seed Registry

Fills a development database with random admins, farmers, organic
farmers, concerns and events.

Usage:
    python manage.py seed_registry
    python manage.py seed_registry --farmers 50 --organic-farmers 20
    python manage.py seed_registry --clear  # Remove seeded registrants first
"""
import random
from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from concerns.models import Concern, ConcernMessage
from events.models import Event
from farmers.models import (
    ApplicantStatus,
    AgriculturalCommodity,
    BusinessRole,
    CivilStatus,
    Education,
    Farmer,
    OrganicFarmer,
    Sex,
)
from farmers.services.registration import RegistrationService

User = get_user_model()

SEED_PREFIX = 'seed_'
SEED_PASSWORD = 'password123'

FIRST_NAMES = [
    'Juan', 'Maria', 'Jose', 'Ana', 'Pedro', 'Rosa', 'Carlos', 'Liza',
    'Ramon', 'Elena', 'Mark', 'Joy', 'Paolo', 'Grace', 'Andres', 'Luz',
]
SURNAMES = [
    'Dela Cruz', 'Santos', 'Reyes', 'Garcia', 'Mendoza', 'Bautista',
    'Villanueva', 'Ramos', 'Aquino', 'Castillo', 'Navarro', 'Torres',
]
BARANGAYS = ['Poblacion', 'San Isidro', 'Santa Cruz', 'San Roque', 'Mabini', 'Rizal', 'Bagong Silang']
MUNICIPALITIES = ['Tanauan', 'Lipa', 'Malvar', 'Santo Tomas', 'Talisay']
CROPS = ['Rice', 'Corn', 'Coffee', 'Banana', 'Pineapple', 'Eggplant', 'Tomato', 'Cacao']
EVENT_TITLES = [
    'Seed Distribution', 'Organic Farming Seminar', 'Soil Testing Caravan',
    'Farmers Assembly', 'Fertilizer Subsidy Release', 'Crop Insurance Briefing',
]
CONCERN_TITLES = [
    'Irrigation schedule', 'Delayed subsidy', 'Pest infestation',
    'Update contact number', 'Registration follow-up',
]

# 1x1 transparent PNG
PLACEHOLDER_IMAGE = (
    'data:image/png;base64,'
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII='
)


def random_mobile():
    return '09' + ''.join(random.choices('0123456789', k=9))


def random_birthdate():
    return date.today() - timedelta(days=random.randint(18 * 365, 70 * 365))


class Command(BaseCommand):
    help = 'Seed the registry with random farmers, organic farmers, concerns and events'

    def add_arguments(self, parser):
        parser.add_argument('--farmers', type=int, default=20, help='Number of regular farmers')
        parser.add_argument('--organic-farmers', type=int, default=10, help='Number of organic farmers')
        parser.add_argument('--events', type=int, default=8, help='Number of events')
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete previously seeded users (and their records) before seeding',
        )

    def handle(self, *args, **options):
        if options['clear']:
            deleted, _ = User.objects.filter(username__startswith=SEED_PREFIX).delete()
            Event.objects.filter(note__startswith='[seed]').delete()
            self.stdout.write(self.style.WARNING(f'Cleared {deleted} seeded records'))

        try:
            with transaction.atomic():
                self.create_admin()
                farmers = [self.create_farmer(i) for i in range(options['farmers'])]
                organic_farmers = [self.create_organic_farmer(i) for i in range(options['organic_farmers'])]
                concerns = self.create_concerns(farmers, organic_farmers)
                events = self.create_events(options['events'])
        except Exception as e:
            raise CommandError(f'Seeding failed: {e}')

        self.stdout.write(self.style.SUCCESS(
            f'Seeded {len(farmers)} farmers, {len(organic_farmers)} organic farmers, '
            f'{len(concerns)} concerns and {len(events)} events '
            f'(password for every seeded login: {SEED_PASSWORD})'
        ))

    def _unique_username(self, kind, index):
        base = f'{SEED_PREFIX}{kind}_{index}'
        username = base
        while User.objects.filter(username=username).exists():
            username = f'{base}_{random.randint(1000, 9999)}'
        return username

    def _personal_fields(self):
        first_name = random.choice(FIRST_NAMES)
        surname = random.choice(SURNAMES)
        return {
            'first_name': first_name,
            'surname': surname,
            'middle_name': random.choice(SURNAMES),
            'sex': random.choice(Sex.values),
            'house_lot_building_no': str(random.randint(1, 300)),
            'street_sitio_subdivision': f'Purok {random.randint(1, 7)}',
            'barangay': random.choice(BARANGAYS),
            'municipality_city': random.choice(MUNICIPALITIES),
            'province': 'Batangas',
            'region': 'IV-A CALABARZON',
            'contact_number': random_mobile(),
            'place_of_birth': random.choice(MUNICIPALITIES),
            'date_of_birth': random_birthdate(),
            'highest_education': random.choice(Education.values),
            'religion': 'Roman Catholic',
            'civil_status': random.choice(CivilStatus.values),
            'government_id': f'GOV-{random.randint(100000, 999999)}',
            'emergency_contact_person': f'{random.choice(FIRST_NAMES)} {surname}',
            'emergency_contact_number': random_mobile(),
            'gross_income_farming': Decimal(random.randint(20000, 300000)),
            'gross_income_non_farming': Decimal(random.randint(0, 100000)),
            'farmer_image': PLACEHOLDER_IMAGE,
            'status': random.choice([
                ApplicantStatus.APPLICANTS, ApplicantStatus.REGISTERED, ApplicantStatus.NOT_QUALIFIED,
            ]),
        }

    def create_admin(self):
        admin, created = User.objects.get_or_create(
            username=f'{SEED_PREFIX}admin',
            defaults={'role': User.UserRole.ADMIN, 'email': 'admin@example.com'},
        )
        if created:
            admin.set_password(SEED_PASSWORD)
            admin.save(update_fields=['password'])
            self.stdout.write(f'  Created admin: {admin.username}')
        return admin

    def create_farmer(self, index):
        data = self._personal_fields()
        category = random.choice(Farmer.CategoryType.values)
        if data['status'] == ApplicantStatus.NOT_QUALIFIED:
            data['not_qualified_reason'] = 'Incomplete documents'

        crop = random.choice(CROPS)
        data.update({
            'username': self._unique_username('farmer', index),
            'password': SEED_PASSWORD,
            'email': f'farmer{index}@example.com',
            'category_type': category,
            'house_head': {
                'household_head': data['first_name'],
                'relationship': 'Self',
                'household_members_total': 4,
                'number_of_male': 2,
                'number_of_female': 2,
            },
            'parcels': [
                {
                    'location': f"{data['barangay']}, {data['municipality_city']}",
                    'total_area_ha': Decimal(random.randint(5, 50)) / 10,
                    'ownership_document_number': f'TCT-{random.randint(1000, 9999)}',
                    'registered_owner': True,
                    'owner_name': f"{data['first_name']} {data['surname']}",
                    'lot': {
                        'crop_or_commodity': crop,
                        'size_ha': Decimal(random.randint(5, 20)) / 10,
                        'farm_type': 'Irrigated',
                    },
                }
            ],
            Farmer.CATEGORY_DETAIL_RELATIONS[category]: self._category_details(category, crop),
        })
        return RegistrationService.register_farmer(data)

    @staticmethod
    def _category_details(category, crop):
        if category == Farmer.CategoryType.FARMER:
            return {'rice': crop == 'Rice', 'corn': crop == 'Corn', 'other_crops': crop}
        if category == Farmer.CategoryType.FARMWORKER:
            return {'land_preparation': True, 'harvesting': True}
        if category == Farmer.CategoryType.FISHERFOLK:
            return {'fish_capture': True, 'fish_vending': random.choice([True, False])}
        return {'part_of_farming_household': True}

    def create_organic_farmer(self, index):
        data = self._personal_fields()
        if data['status'] == ApplicantStatus.NOT_QUALIFIED:
            data['not_qualified_reason'] = 'No organic practice verified'

        certified = random.choice([True, False])
        data.update({
            'username': self._unique_username('organic', index),
            'password': SEED_PASSWORD,
            'email': f'organic{index}@example.com',
            'has_organic_certification': certified,
            'certification': OrganicFarmer.Certification.PGS if certified else '',
            'production_for_food': BusinessRole.PRIMARY_BUSINESS,
            'retailing': random.choice(BusinessRole.values),
            'direct_to_consumer': True,
            'commodities': [
                {
                    'commodity_type': random.choice(AgriculturalCommodity.CommodityType.values),
                    'name': random.choice(CROPS),
                    'size_ha': Decimal(random.randint(1, 30)) / 10,
                    'annual_volume_kg': random.randint(100, 5000),
                }
                for _ in range(random.randint(1, 3))
            ],
            'facilities': [
                {
                    'equipment': 'Compost shredder',
                    'ownership': 'Owned',
                    'model': 'CS-100',
                    'quantity': '1',
                    'service_area': '1 ha',
                    'working_hours_per_day': '4',
                    'dedicated_to_organic': True,
                }
            ],
        })
        return RegistrationService.register_organic_farmer(data)

    def create_concerns(self, farmers, organic_farmers):
        admin = User.objects.get(username=f'{SEED_PREFIX}admin')
        concerns = []
        owners = [('farmer', f) for f in farmers] + [('organic_farmer', f) for f in organic_farmers]
        for owner_field, registrant in random.sample(owners, k=min(len(owners), 10)):
            concern = Concern.objects.create(
                title=random.choice(CONCERN_TITLES),
                description='Seeded concern for development.',
                status=random.choice(Concern.Status.values),
                **{owner_field: registrant}
            )
            ConcernMessage.objects.create(
                concern=concern,
                sender=registrant.user,
                sender_type=registrant.user.role,
                content='Good day, I would like to follow up on this.',
            )
            ConcernMessage.objects.create(
                concern=concern,
                sender=admin,
                sender_type=ConcernMessage.SenderType.ADMIN,
                content='Thank you, we are looking into it.',
            )
            concerns.append(concern)
        return concerns

    def create_events(self, count):
        now = timezone.now()
        events = []
        for _ in range(count):
            events.append(Event.objects.create(
                title=random.choice(EVENT_TITLES),
                location=f'{random.choice(BARANGAYS)} Covered Court',
                note='[seed] Bring your registry ID.',
                event_date=now + timedelta(days=random.randint(-30, 60), hours=random.randint(0, 8)),
                for_farmers=random.choice([True, True, False]),
                for_organic_farmers=random.choice([True, True, False]),
            ))
        return events
