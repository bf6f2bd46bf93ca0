"""
Test data builders shared by the app test modules.
"""
from datetime import date
from decimal import Decimal
from itertools import count

_sequence = count(1)

# 1x1 transparent PNG
TINY_IMAGE = (
    'data:image/png;base64,'
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII='
)


def registrant_payload(**overrides):
    """Personal fields accepted by both registration endpoints."""
    n = next(_sequence)
    data = {
        'username': f'registrant{n}',
        'password': 'testpass123',
        'email': f'registrant{n}@example.com',
        'surname': 'Dela Cruz',
        'first_name': 'Juan',
        'middle_name': 'Santos',
        'sex': 'MALE',
        'house_lot_building_no': '12',
        'street_sitio_subdivision': 'Purok 3',
        'barangay': 'Poblacion',
        'municipality_city': 'Tanauan',
        'province': 'Batangas',
        'region': 'IV-A CALABARZON',
        'contact_number': '09171234567',
        'place_of_birth': 'Tanauan',
        'date_of_birth': '1985-06-15',
        'highest_education': 'COLLEGE',
        'civil_status': 'MARRIED',
        'government_id': f'GOV-{n:06d}',
        'emergency_contact_person': 'Maria Dela Cruz',
        'emergency_contact_number': '09181234567',
        'gross_income_farming': '120000.00',
        'gross_income_non_farming': '0.00',
        'farmer_image': TINY_IMAGE,
    }
    data.update(overrides)
    return data


def service_data(payload):
    """Registration payload converted to the types the service layer takes."""
    data = dict(payload)
    data['date_of_birth'] = date.fromisoformat(data['date_of_birth'])
    data['gross_income_farming'] = Decimal(data['gross_income_farming'])
    data['gross_income_non_farming'] = Decimal(data['gross_income_non_farming'])
    return data
