"""
QR Scanner Service

Resolves the id read from a farmer's QR code to a registered farmer's
identity card data, and renders the QR code itself.
"""

import base64
import io
import logging
import re

import qrcode

from farmers.models import ApplicantStatus, Farmer, OrganicFarmer

logger = logging.getLogger(__name__)


REGISTRANT_TYPES = {
    'farmer': Farmer,
    'organic_farmer': OrganicFarmer,
}

_LEADING_DIGITS = re.compile(r'^\s*(\d+)')


def parse_scanned_id(raw):
    """Integer at the start of the scanned text, or None."""
    match = _LEADING_DIGITS.match(raw or '')
    return int(match.group(1)) if match else None


class ScannerService:

    @staticmethod
    def lookup(raw_id, registrant_type):
        """
        Find a REGISTERED registrant by the scanned id.

        Returns a dict for the identity card, or None when the id is not
        numeric or no registered record of that type has it.
        """
        model = REGISTRANT_TYPES.get(registrant_type)
        if model is None:
            raise ValueError(f"Unknown registrant type '{registrant_type}'")

        pk = parse_scanned_id(raw_id)
        if pk is None:
            logger.info(f"Scanned value '{raw_id}' holds no id")
            return None

        registrant = model.objects.filter(pk=pk, status=ApplicantStatus.REGISTERED).first()
        if registrant is None:
            return None

        data = {
            'id': registrant.id,
            'first_name': registrant.first_name,
            'surname': registrant.surname,
            'house_lot_building_no': registrant.house_lot_building_no,
            'street_sitio_subdivision': registrant.street_sitio_subdivision,
            'barangay': registrant.barangay,
            'municipality_city': registrant.municipality_city,
            'province': registrant.province,
            'date_of_birth': registrant.date_of_birth.isoformat(),
            'farmer_image': registrant.farmer_image,
            'age': registrant.age(),
            'type': registrant_type,
        }
        if registrant_type == 'farmer':
            data['category_type'] = registrant.category_type
        return data

    @staticmethod
    def qr_code_data_url(registrant):
        """PNG data URL of a QR code holding the registrant id."""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(str(registrant.id))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        img_str = base64.b64encode(buffer.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"
