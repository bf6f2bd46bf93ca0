from rest_framework import serializers

from .models import (
    ApplicantStatus,
    ApplicantNotification,
    Farmer,
    CropFarmingDetails,
    FarmworkerDetails,
    FisherfolkDetails,
    AgriYouthDetails,
    HouseHead,
    FarmParcel,
    LotDetail,
)
from .services.registration import RegistrationService


# Personal fields shared by both registrant types
REGISTRANT_FIELDS = [
    'surname', 'first_name', 'middle_name', 'extension_name', 'sex',
    'house_lot_building_no', 'street_sitio_subdivision', 'barangay',
    'municipality_city', 'province', 'region',
    'contact_number', 'place_of_birth', 'date_of_birth', 'highest_education',
    'religion', 'civil_status', 'four_ps_beneficiary', 'mothers_name', 'fathers_name',
    'government_id', 'emergency_contact_person', 'emergency_contact_number',
    'gross_income_farming', 'gross_income_non_farming', 'farmer_image',
]

REVIEW_FIELDS = ['status', 'not_qualified_reason', 'created_at', 'updated_at']


# =============================================================================
# NESTED RECORDS
# =============================================================================

class CropFarmingDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = CropFarmingDetails
        exclude = ['id', 'farmer']


class FarmworkerDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = FarmworkerDetails
        exclude = ['id', 'farmer']


class FisherfolkDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = FisherfolkDetails
        exclude = ['id', 'farmer']


class AgriYouthDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = AgriYouthDetails
        exclude = ['id', 'farmer']


class HouseHeadSerializer(serializers.ModelSerializer):
    class Meta:
        model = HouseHead
        exclude = ['id', 'farmer']


class LotDetailSerializer(serializers.ModelSerializer):
    class Meta:
        model = LotDetail
        exclude = ['id', 'parcel']


class FarmParcelSerializer(serializers.ModelSerializer):
    # Writable so admin edits can target an existing parcel
    id = serializers.IntegerField(required=False)
    lot = LotDetailSerializer(required=False, allow_null=True)

    class Meta:
        model = FarmParcel
        exclude = ['farmer']


class NestedFarmerFieldsMixin(serializers.Serializer):
    crop_details = CropFarmingDetailsSerializer(required=False, allow_null=True)
    farmworker_details = FarmworkerDetailsSerializer(required=False, allow_null=True)
    fisherfolk_details = FisherfolkDetailsSerializer(required=False, allow_null=True)
    agri_youth_details = AgriYouthDetailsSerializer(required=False, allow_null=True)
    house_head = HouseHeadSerializer(required=False, allow_null=True)
    parcels = FarmParcelSerializer(many=True, required=False)


FARMER_FIELDS = REGISTRANT_FIELDS + [
    'spouse_name', 'farmer_signature', 'farmer_fingerprint', 'category_type', 'number_of_farms',
]

NESTED_FARMER_FIELDS = [
    'crop_details', 'farmworker_details', 'fisherfolk_details', 'agri_youth_details',
    'house_head', 'parcels',
]


# =============================================================================
# READ
# =============================================================================

class FarmerListSerializer(serializers.ModelSerializer):
    """Row in the admin worklist."""
    full_name = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)

    class Meta:
        model = Farmer
        fields = [
            'id', 'full_name', 'surname', 'first_name', 'middle_name', 'extension_name',
            'sex', 'contact_number', 'email', 'barangay', 'municipality_city', 'province',
            'category_type', 'farmer_image',
        ] + REVIEW_FIELDS
        read_only_fields = fields


class FarmerDetailSerializer(NestedFarmerFieldsMixin, serializers.ModelSerializer):
    """The full record with every nested sub-record."""
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(read_only=True)
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Farmer
        fields = ['id', 'username', 'email', 'full_name'] + FARMER_FIELDS + NESTED_FARMER_FIELDS + REVIEW_FIELDS
        read_only_fields = fields


# =============================================================================
# WRITE
# =============================================================================

class FarmerRegistrationSerializer(NestedFarmerFieldsMixin, serializers.ModelSerializer):
    """
    Public sign-up. Username conflicts are checked by the view so it
    can answer 409 instead of a field error.
    """
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True, style={'input_type': 'password'})
    email = serializers.EmailField(required=False, allow_blank=True)
    number_of_farms = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    class Meta:
        model = Farmer
        fields = ['username', 'password', 'email'] + FARMER_FIELDS + NESTED_FARMER_FIELDS

    def create(self, validated_data):
        return RegistrationService.register_farmer(validated_data)


class FarmerUpdateSerializer(NestedFarmerFieldsMixin, serializers.ModelSerializer):
    """Admin edit; always used with partial=True."""
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)

    class Meta:
        model = Farmer
        fields = ['username', 'email'] + FARMER_FIELDS + NESTED_FARMER_FIELDS

    def validate_username(self, value):
        if RegistrationService.username_taken(value, exclude_user=self.instance.user):
            raise serializers.ValidationError("Username already exists")
        return value

    def update(self, instance, validated_data):
        return RegistrationService.update_farmer(instance, validated_data)


# =============================================================================
# STATUS
# =============================================================================

class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ApplicantStatus.choices)
    rejection_reason = serializers.CharField(required=False, allow_blank=True, default='')


class ApplicantNotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = ApplicantNotification
        fields = [
            'id', 'channel', 'recipient', 'applicant_status', 'status',
            'sent_at', 'failed_at', 'failure_reason', 'provider_message_id', 'created_at',
        ]
        read_only_fields = fields


class TestSMSSerializer(serializers.Serializer):
    phone_number = serializers.RegexField(
        r'^09\d{9}$',
        error_messages={'invalid': 'Enter an 11-digit number starting with 09.'}
    )
    message = serializers.CharField(max_length=640)
