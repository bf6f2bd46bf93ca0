"""
Printable registrant profile (PDF).
"""

import base64
import binascii
import logging
from io import BytesIO

from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, Image

from farmers.models import Farmer

logger = logging.getLogger(__name__)


TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (0, -1), colors.HexColor('#D8F3DC')),
    ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 9),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
])

LIST_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2D6A4F')),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 9),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
])


def _yes_no(value):
    return 'Yes' if value else 'No'


def _image_from_data_url(data_url, width=4 * cm, height=4 * cm):
    """Decode an inline data URL into a flowable, or None when unreadable."""
    if not data_url or ',' not in data_url:
        return None
    try:
        raw = base64.b64decode(data_url.split(',', 1)[1])
        # Open eagerly so a corrupt image fails here, not in doc.build()
        ImageReader(BytesIO(raw)).getSize()
        return Image(BytesIO(raw), width=width, height=height)
    except (binascii.Error, ValueError, OSError) as e:
        logger.warning(f"Skipping unreadable profile image: {e}")
        return None


def _key_value_table(rows):
    table = Table([[label, str(value if value not in (None, '') else '-')] for label, value in rows],
                  colWidths=[6 * cm, 11 * cm])
    table.setStyle(TABLE_STYLE)
    return table


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name='MainTitle',
        parent=styles['Heading1'],
        fontSize=18,
        spaceAfter=10,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#2D6A4F')
    ))
    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Heading2'],
        fontSize=13,
        spaceBefore=12,
        spaceAfter=6,
        textColor=colors.HexColor('#40916C')
    ))
    styles.add(ParagraphStyle(
        name='SubInfo',
        parent=styles['Normal'],
        fontSize=9,
        alignment=TA_CENTER,
        textColor=colors.grey
    ))
    return styles


def _personal_rows(registrant):
    return [
        ('Registry ID', registrant.id),
        ('Name', registrant.full_name),
        ('Sex', registrant.get_sex_display()),
        ('Date of Birth', registrant.date_of_birth.isoformat()),
        ('Age', registrant.age()),
        ('Place of Birth', registrant.place_of_birth),
        ('Address', registrant.address),
        ('Contact Number', registrant.contact_number),
        ('Email', registrant.email),
        ('Highest Education', registrant.get_highest_education_display()),
        ('Religion', registrant.religion),
        ('Civil Status', registrant.get_civil_status_display()),
        ("Mother's Name", registrant.mothers_name),
        ("Father's Name", registrant.fathers_name),
        ('4Ps Beneficiary', registrant.four_ps_beneficiary),
        ('Government ID', registrant.government_id),
        ('Emergency Contact', registrant.emergency_contact_person),
        ('Emergency Number', registrant.emergency_contact_number),
        ('Gross Income (Farming)', registrant.gross_income_farming),
        ('Gross Income (Non-Farming)', registrant.gross_income_non_farming),
        ('Status', registrant.get_status_display()),
    ]


def _farmer_sections(farmer, styles):
    elements = [Paragraph("Livelihood", styles['SectionTitle'])]
    rows = [('Category', farmer.get_category_type_display()), ('Number of Farms', farmer.number_of_farms)]

    relation = Farmer.CATEGORY_DETAIL_RELATIONS[farmer.category_type]
    detail = getattr(farmer, relation, None)
    if detail is not None:
        for field in detail._meta.concrete_fields:
            if field.name in ('id', 'farmer'):
                continue
            value = getattr(detail, field.name)
            rows.append((field.verbose_name.capitalize(), _yes_no(value) if isinstance(value, bool) else value))
    elements.append(_key_value_table(rows))

    house_head = getattr(farmer, 'house_head', None)
    if house_head is not None:
        elements.append(Paragraph("Household", styles['SectionTitle']))
        elements.append(_key_value_table([
            ('Household Head', house_head.household_head),
            ('Relationship', house_head.relationship),
            ('Members', house_head.household_members_total),
            ('Male', house_head.number_of_male),
            ('Female', house_head.number_of_female),
        ]))

    parcels = list(farmer.parcels.all())
    if parcels:
        elements.append(Paragraph("Farm Parcels", styles['SectionTitle']))
        data = [['Location', 'Area (ha)', 'Document No.', 'Ancestral', 'ARB', 'Crop/Commodity']]
        for parcel in parcels:
            lot = getattr(parcel, 'lot', None)
            data.append([
                parcel.location,
                str(parcel.total_area_ha),
                parcel.ownership_document_number,
                _yes_no(parcel.within_ancestral_domain),
                _yes_no(parcel.agrarian_reform_beneficiary),
                lot.crop_or_commodity if lot else '-',
            ])
        table = Table(data, colWidths=[4 * cm, 2 * cm, 3 * cm, 2 * cm, 1.5 * cm, 4.5 * cm])
        table.setStyle(LIST_STYLE)
        elements.append(table)
    return elements


def _organic_sections(organic_farmer, styles):
    elements = [Paragraph("Certification and Business", styles['SectionTitle'])]
    elements.append(_key_value_table([
        ('Organic Certification', _yes_no(organic_farmer.has_organic_certification)),
        ('Certification Type', organic_farmer.get_certification_display()),
        ('Certification Stage', organic_farmer.certification_stage),
        ('Production for Inputs', organic_farmer.get_production_for_inputs_display()),
        ('Production for Food', organic_farmer.get_production_for_food_display()),
        ('Post-Harvest & Processing', organic_farmer.get_post_harvest_processing_display()),
        ('Trading & Wholesale', organic_farmer.get_trading_wholesale_display()),
        ('Retailing', organic_farmer.get_retailing_display()),
        ('Transport & Logistics', organic_farmer.get_transport_logistics_display()),
        ('Warehousing', organic_farmer.get_warehousing_display()),
    ]))

    commodities = list(organic_farmer.commodities.all())
    if commodities:
        elements.append(Paragraph("Agricultural Commodities", styles['SectionTitle']))
        data = [['Type', 'Name', 'Size (ha)', 'Annual Volume (kg)', 'Certification']]
        for item in commodities:
            data.append([
                item.get_commodity_type_display(), item.name, str(item.size_ha),
                str(item.annual_volume_kg), item.certification or '-',
            ])
        table = Table(data, colWidths=[4 * cm, 3.5 * cm, 2 * cm, 3.5 * cm, 4 * cm])
        table.setStyle(LIST_STYLE)
        elements.append(table)

    facilities = list(organic_farmer.facilities.all())
    if facilities:
        elements.append(Paragraph("Own/Shared Facilities", styles['SectionTitle']))
        data = [['Equipment', 'Ownership', 'Model', 'Qty', 'Organic Only']]
        for item in facilities:
            data.append([
                item.equipment, item.ownership, item.model, item.quantity,
                _yes_no(item.dedicated_to_organic),
            ])
        table = Table(data, colWidths=[5 * cm, 3 * cm, 3.5 * cm, 2 * cm, 3.5 * cm])
        table.setStyle(LIST_STYLE)
        elements.append(table)
    return elements


def build_profile_pdf(registrant):
    """Render a registrant's full profile and return the PDF bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=1.5 * cm,
        leftMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm
    )
    styles = _styles()

    kind = 'Farmer' if isinstance(registrant, Farmer) else 'Organic Farmer'
    elements = [
        Paragraph("Farmer Management System", styles['MainTitle']),
        Paragraph(f"{kind} Profile", styles['Heading2']),
        Paragraph(f"Generated: {timezone.now().strftime('%Y-%m-%d %H:%M')}", styles['SubInfo']),
        Spacer(1, 12),
    ]

    photo = _image_from_data_url(registrant.farmer_image)
    if photo is not None:
        elements.append(photo)
        elements.append(Spacer(1, 8))

    elements.append(Paragraph("Personal Information", styles['SectionTitle']))
    elements.append(_key_value_table(_personal_rows(registrant)))

    if isinstance(registrant, Farmer):
        elements.extend(_farmer_sections(registrant, styles))
    else:
        elements.extend(_organic_sections(registrant, styles))

    doc.build(elements)
    buffer.seek(0)
    return buffer.getvalue()
