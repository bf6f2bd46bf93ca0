"""
Registry models for regular and organic farmers.

A registrant is created by public sign-up with status APPLICANTS and is
then moved between statuses by an administrator. Each registrant owns
one login (``accounts.User``) and a set of nested records that are
created and edited together with it.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class ApplicantStatus(models.TextChoices):
    APPLICANTS = 'APPLICANTS', 'Applicant'
    NOT_QUALIFIED = 'NOT_QUALIFIED', 'Not Qualified'
    REGISTERED = 'REGISTERED', 'Registered'
    ARCHIVED = 'ARCHIVED', 'Archived'


class Sex(models.TextChoices):
    MALE = 'MALE', 'Male'
    FEMALE = 'FEMALE', 'Female'


class Education(models.TextChoices):
    NONE = 'NONE', 'None'
    ELEMENTARY = 'ELEMENTARY', 'Elementary'
    HIGHSCHOOL = 'HIGHSCHOOL', 'High School'
    SENIOR_HIGHSCHOOL = 'SENIOR_HIGHSCHOOL', 'Senior High School'
    COLLEGE = 'COLLEGE', 'College'
    POST_GRADUATE = 'POST_GRADUATE', 'Post Graduate'
    VOCATIONAL = 'VOCATIONAL', 'Vocational'


class CivilStatus(models.TextChoices):
    SINGLE = 'SINGLE', 'Single'
    MARRIED = 'MARRIED', 'Married'
    WIDOWED = 'WIDOWED', 'Widowed'
    SEPARATED = 'SEPARATED', 'Separated'


class RegistrantProfile(models.Model):
    """
    Personal, address and income fields shared by both farmer types.
    """

    # Personal Identity
    surname = models.CharField(max_length=100)
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True)
    extension_name = models.CharField(max_length=20, blank=True, help_text="Jr., Sr., III")
    sex = models.CharField(max_length=10, choices=Sex.choices)

    # Address
    house_lot_building_no = models.CharField(max_length=100)
    street_sitio_subdivision = models.CharField(max_length=150)
    barangay = models.CharField(max_length=100, db_index=True)
    municipality_city = models.CharField(max_length=100, db_index=True)
    province = models.CharField(max_length=100, db_index=True)
    region = models.CharField(max_length=100)

    # Contact & Personal Info
    contact_number = models.CharField(
        max_length=20,
        help_text="Mobile number; SMS is only sent to 09XXXXXXXXX numbers"
    )
    place_of_birth = models.CharField(max_length=150)
    date_of_birth = models.DateField()
    highest_education = models.CharField(max_length=20, choices=Education.choices)
    religion = models.CharField(max_length=100, blank=True)
    civil_status = models.CharField(max_length=20, choices=CivilStatus.choices)
    four_ps_beneficiary = models.CharField(
        max_length=100,
        blank=True,
        help_text="4Ps household id, if a beneficiary"
    )
    mothers_name = models.CharField(max_length=150, blank=True)
    fathers_name = models.CharField(max_length=150, blank=True)
    government_id = models.CharField(max_length=100)
    emergency_contact_person = models.CharField(max_length=150, blank=True)
    emergency_contact_number = models.CharField(max_length=20, blank=True)

    # Income (last year)
    gross_income_farming = models.DecimalField(
        max_digits=14, decimal_places=2, default=0,
        validators=[MinValueValidator(0)]
    )
    gross_income_non_farming = models.DecimalField(
        max_digits=14, decimal_places=2, default=0,
        validators=[MinValueValidator(0)]
    )

    # Images are stored inline as data URLs
    farmer_image = models.TextField()

    # Review
    status = models.CharField(
        max_length=20,
        choices=ApplicantStatus.choices,
        default=ApplicantStatus.APPLICANTS,
        db_index=True
    )
    not_qualified_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.full_name} ({self.get_status_display()})"

    @property
    def full_name(self):
        parts = [self.first_name, self.middle_name, self.surname, self.extension_name]
        return ' '.join(p for p in parts if p)

    @property
    def address(self):
        parts = [
            self.house_lot_building_no, self.street_sitio_subdivision, self.barangay,
            self.municipality_city, self.province, self.region,
        ]
        return ', '.join(p for p in parts if p)

    @property
    def email(self):
        return self.user.email if self.user_id else ''

    def age(self, today=None):
        """Whole years lived, counting a year as 365.25 days."""
        today = today or timezone.localdate()
        return int((today - self.date_of_birth).days // 365.25)


# =============================================================================
# REGULAR FARMERS
# =============================================================================

class Farmer(RegistrantProfile):
    """
    A regular farmer, farmworker, fisherfolk or agri-youth registrant.
    """

    class CategoryType(models.TextChoices):
        FARMER = 'FARMER', 'Farmer'
        FARMWORKER = 'FARMWORKER', 'Farmworker/Laborer'
        FISHERFOLK = 'FISHERFOLK', 'Fisherfolk'
        AGRI_YOUTH = 'AGRI_YOUTH', 'Agri Youth'

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='farmer_profile'
    )
    spouse_name = models.CharField(max_length=150, blank=True)
    farmer_signature = models.TextField(blank=True)
    farmer_fingerprint = models.TextField(blank=True)
    category_type = models.CharField(
        max_length=20,
        choices=CategoryType.choices,
        db_index=True
    )
    number_of_farms = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'farmers'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='farmers_status_created_idx'),
            models.Index(fields=['surname', 'first_name'], name='farmers_name_idx'),
        ]

    # Related name of the detail record for each category
    CATEGORY_DETAIL_RELATIONS = {
        CategoryType.FARMER: 'crop_details',
        CategoryType.FARMWORKER: 'farmworker_details',
        CategoryType.FISHERFOLK: 'fisherfolk_details',
        CategoryType.AGRI_YOUTH: 'agri_youth_details',
    }

    @property
    def total_farm_area(self):
        return sum((p.total_area_ha for p in self.parcels.all()), 0)


class CropFarmingDetails(models.Model):
    """Activities of a registrant in the FARMER category."""
    farmer = models.OneToOneField(Farmer, on_delete=models.CASCADE, related_name='crop_details')
    rice = models.BooleanField(default=False)
    corn = models.BooleanField(default=False)
    other_crops = models.CharField(max_length=255, blank=True)
    livestock = models.BooleanField(default=False)
    livestock_details = models.CharField(max_length=255, blank=True)
    poultry = models.BooleanField(default=False)
    poultry_details = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'farmer_crop_details'

    @property
    def primary_crop(self):
        if self.rice:
            return 'Rice'
        if self.corn:
            return 'Corn'
        return self.other_crops or 'Not specified'


class FarmworkerDetails(models.Model):
    """Kind of work done by a FARMWORKER registrant."""
    farmer = models.OneToOneField(Farmer, on_delete=models.CASCADE, related_name='farmworker_details')
    land_preparation = models.BooleanField(default=False)
    planting_transplanting = models.BooleanField(default=False)
    cultivation = models.BooleanField(default=False)
    harvesting = models.BooleanField(default=False)
    others = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'farmworker_details'


class FisherfolkDetails(models.Model):
    farmer = models.OneToOneField(Farmer, on_delete=models.CASCADE, related_name='fisherfolk_details')
    fish_capture = models.BooleanField(default=False)
    aquaculture = models.BooleanField(default=False)
    gleaning = models.BooleanField(default=False)
    fish_processing = models.BooleanField(default=False)
    fish_vending = models.BooleanField(default=False)
    others = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'fisherfolk_details'


class AgriYouthDetails(models.Model):
    farmer = models.OneToOneField(Farmer, on_delete=models.CASCADE, related_name='agri_youth_details')
    part_of_farming_household = models.BooleanField(default=False)
    attended_formal_agri_fishery = models.BooleanField(default=False)
    attended_non_formal_agri_fishery = models.BooleanField(default=False)
    participated_in_agricultural_activity = models.BooleanField(default=False)
    fish_vending = models.BooleanField(default=False)
    others = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'agri_youth_details'


class HouseHead(models.Model):
    farmer = models.OneToOneField(Farmer, on_delete=models.CASCADE, related_name='house_head')
    household_head = models.CharField(max_length=150, blank=True)
    relationship = models.CharField(max_length=100, blank=True)
    household_members_total = models.PositiveIntegerField(default=0)
    number_of_male = models.PositiveIntegerField(default=0)
    number_of_female = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'house_heads'


class FarmParcel(models.Model):
    """
    One farm parcel. Ownership is described by exactly one of the
    registered-owner, tenant, lessee or others fields.
    """
    farmer = models.ForeignKey(Farmer, on_delete=models.CASCADE, related_name='parcels')
    location = models.CharField(max_length=255)
    total_area_ha = models.DecimalField(
        max_digits=10, decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text="Total farm area in hectares"
    )
    within_ancestral_domain = models.BooleanField(default=False)
    agrarian_reform_beneficiary = models.BooleanField(default=False)
    ownership_document_number = models.CharField(max_length=100)

    # Ownership type
    registered_owner = models.BooleanField(default=False)
    owner_name = models.CharField(max_length=150, blank=True)
    tenant = models.BooleanField(default=False)
    tenant_name = models.CharField(max_length=150, blank=True)
    lessee = models.BooleanField(default=False)
    lessee_name = models.CharField(max_length=150, blank=True)
    ownership_others = models.CharField(max_length=150, blank=True)
    ownership_others_details = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'farm_parcels'
        ordering = ['id']

    def __str__(self):
        return f"{self.location} ({self.total_area_ha} ha)"


class LotDetail(models.Model):
    """Crop or livestock on a parcel; only recorded for the FARMER category."""
    parcel = models.OneToOneField(FarmParcel, on_delete=models.CASCADE, related_name='lot')
    crop_or_commodity = models.CharField(max_length=150, blank=True)
    size_ha = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    head_count = models.PositiveIntegerField(default=0, help_text="Number of head for livestock and poultry")
    farm_type = models.CharField(max_length=100, blank=True)
    organic_practitioner = models.BooleanField(default=False)

    class Meta:
        db_table = 'lot_details'


# =============================================================================
# ORGANIC FARMERS
# =============================================================================

class BusinessRole(models.TextChoices):
    PRIMARY_BUSINESS = 'PRIMARY_BUSINESS', 'Primary Business'
    SECONDARY_BUSINESS = 'SECONDARY_BUSINESS', 'Secondary Business'
    NOT_APPLICABLE = 'NOT_APPLICABLE', 'Not Applicable'


class OrganicFarmer(RegistrantProfile):
    """
    An organic agriculture practitioner.
    """

    class Certification(models.TextChoices):
        THIRD_PARTY = 'THIRD_PARTY_CERTIFICATION', 'Third Party Certification'
        PGS = 'PARTICIPATORY_GUARANTEE_SYSTEM', 'Participatory Guarantee System'

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='organic_farmer_profile'
    )

    # Certification
    has_organic_certification = models.BooleanField(default=False)
    certification = models.CharField(max_length=40, choices=Certification.choices, blank=True)
    certification_stage = models.CharField(max_length=255, blank=True)

    # Nature of business
    production_for_inputs = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    production_for_food = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    post_harvest_processing = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    trading_wholesale = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    retailing = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    transport_logistics = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    warehousing = models.CharField(
        max_length=20, choices=BusinessRole.choices, default=BusinessRole.NOT_APPLICABLE
    )
    business_others = models.CharField(max_length=255, blank=True)

    # Target market
    direct_to_consumer = models.BooleanField(default=False)
    trader = models.BooleanField(default=False)
    trader_type = models.CharField(max_length=150, blank=True)
    retailer = models.BooleanField(default=False)
    institutional_buyer = models.BooleanField(default=False)
    institutional_buyer_type = models.CharField(max_length=150, blank=True)
    international_buyer = models.BooleanField(default=False)
    international_buyer_type = models.CharField(max_length=150, blank=True)
    market_others = models.CharField(max_length=255, blank=True)

    other_commodity = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'organic_farmers'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='organic_status_created_idx'),
            models.Index(fields=['surname', 'first_name'], name='organic_name_idx'),
        ]


class AgriculturalCommodity(models.Model):
    """A commodity an organic farmer produces."""

    class CommodityType(models.TextChoices):
        GRAINS = 'Grains', 'Grains'
        LOWLAND_VEGETABLES = 'LowlandVegetables', 'Lowland Vegetables'
        UPLAND_VEGETABLES = 'UplandVegetables', 'Upland Vegetables'
        FRUITS_AND_NUTS = 'FruitsAndNuts', 'Fruits and Nuts'
        MUSHROOM = 'Mushroom', 'Mushroom'
        ORGANIC_SOIL = 'OrganicSoil', 'Organic Soil Amendments'
        ROOTCROPS = 'Rootcrops', 'Rootcrops'
        POULTRY_PRODUCTS = 'PoultryProducts', 'Poultry Products'
        LIVESTOCK_PRODUCTS = 'LivestockProducts', 'Livestock Products'
        FISHERIES_AQUACULTURE = 'FisheriesAndAquaculture', 'Fisheries and Aquaculture'
        INDUSTRIAL_CROPS = 'IndustrialCropsAndProducts', 'Industrial Crops and Products'
        OTHER = 'OtherCommodity', 'Other Commodity'

    organic_farmer = models.ForeignKey(OrganicFarmer, on_delete=models.CASCADE, related_name='commodities')
    commodity_type = models.CharField(max_length=40, choices=CommodityType.choices, db_index=True)
    name = models.CharField(max_length=150)
    size_ha = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    annual_volume_kg = models.PositiveIntegerField(default=0)
    certification = models.CharField(max_length=150, blank=True)

    class Meta:
        db_table = 'agricultural_commodities'
        ordering = ['commodity_type', 'id']
        verbose_name_plural = 'Agricultural commodities'

    def __str__(self):
        return f"{self.name} ({self.get_commodity_type_display()})"


class OwnSharedFacility(models.Model):
    """Machinery or facility an organic farmer owns or shares."""
    organic_farmer = models.ForeignKey(OrganicFarmer, on_delete=models.CASCADE, related_name='facilities')
    equipment = models.CharField(max_length=150, help_text="Facility, machinery or equipment used")
    ownership = models.CharField(max_length=100)
    model = models.CharField(max_length=100)
    quantity = models.CharField(max_length=50)
    service_area = models.CharField(max_length=150, help_text="Volume of services / area covered")
    working_hours_per_day = models.CharField(max_length=50)
    remarks = models.CharField(max_length=255, blank=True)
    dedicated_to_organic = models.BooleanField(default=False)

    class Meta:
        db_table = 'own_shared_facilities'
        ordering = ['id']
        verbose_name_plural = 'Own/shared facilities'


# =============================================================================
# NOTIFICATION LOG
# =============================================================================

class ApplicantNotification(models.Model):
    """
    One email or SMS attempt made after a status change.

    Status changes are saved before any notification goes out and are
    never rolled back, so this log is where a missed message shows up.
    """

    CHANNEL_CHOICES = [
        ('email', 'Email'),
        ('sms', 'SMS'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('sent', 'Sent'),
        ('failed', 'Failed'),
    ]

    farmer = models.ForeignKey(
        Farmer, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications'
    )
    organic_farmer = models.ForeignKey(
        OrganicFarmer, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications'
    )

    channel = models.CharField(max_length=10, choices=CHANNEL_CHOICES, db_index=True)
    recipient = models.CharField(max_length=254)
    applicant_status = models.CharField(
        max_length=20,
        choices=ApplicantStatus.choices,
        help_text="Status the message announced"
    )
    subject = models.CharField(max_length=200, blank=True)
    message = models.TextField()

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending', db_index=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    failed_at = models.DateTimeField(null=True, blank=True)
    failure_reason = models.TextField(blank=True)
    provider_message_id = models.CharField(
        max_length=100,
        blank=True,
        help_text="Gateway id for SMS batches"
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'applicant_notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['channel', 'status'], name='notif_channel_status_idx'),
        ]

    def __str__(self):
        return f"{self.channel} to {self.recipient}: {self.status}"

    def mark_as_sent(self, provider_message_id=''):
        self.status = 'sent'
        self.sent_at = timezone.now()
        self.provider_message_id = provider_message_id or ''
        self.save()

    def mark_as_failed(self, reason):
        self.status = 'failed'
        self.failed_at = timezone.now()
        self.failure_reason = reason
        self.save()
