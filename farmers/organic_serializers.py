from rest_framework import serializers

from .models import OrganicFarmer, AgriculturalCommodity, OwnSharedFacility
from .serializers import REGISTRANT_FIELDS, REVIEW_FIELDS
from .services.registration import RegistrationService


ORGANIC_FIELDS = REGISTRANT_FIELDS + [
    # Certification
    'has_organic_certification', 'certification', 'certification_stage',
    # Nature of business
    'production_for_inputs', 'production_for_food', 'post_harvest_processing',
    'trading_wholesale', 'retailing', 'transport_logistics', 'warehousing', 'business_others',
    # Target market
    'direct_to_consumer', 'trader', 'trader_type', 'retailer',
    'institutional_buyer', 'institutional_buyer_type',
    'international_buyer', 'international_buyer_type', 'market_others',
    'other_commodity',
]


class AgriculturalCommoditySerializer(serializers.ModelSerializer):
    commodity_type_display = serializers.CharField(source='get_commodity_type_display', read_only=True)

    class Meta:
        model = AgriculturalCommodity
        exclude = ['id', 'organic_farmer']


class OwnSharedFacilitySerializer(serializers.ModelSerializer):
    class Meta:
        model = OwnSharedFacility
        exclude = ['id', 'organic_farmer']


class OrganicFarmerListSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)

    class Meta:
        model = OrganicFarmer
        fields = [
            'id', 'full_name', 'surname', 'first_name', 'middle_name', 'extension_name',
            'sex', 'contact_number', 'email', 'barangay', 'municipality_city', 'province',
            'has_organic_certification', 'farmer_image',
        ] + REVIEW_FIELDS
        read_only_fields = fields


class OrganicFarmerDetailSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(read_only=True)
    full_name = serializers.CharField(read_only=True)
    commodities = AgriculturalCommoditySerializer(many=True, read_only=True)
    facilities = OwnSharedFacilitySerializer(many=True, read_only=True)

    class Meta:
        model = OrganicFarmer
        fields = (
            ['id', 'username', 'email', 'full_name'] + ORGANIC_FIELDS
            + ['commodities', 'facilities'] + REVIEW_FIELDS
        )
        read_only_fields = fields


class OrganicFarmerRegistrationSerializer(serializers.ModelSerializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True, style={'input_type': 'password'})
    email = serializers.EmailField(required=False, allow_blank=True)
    commodities = AgriculturalCommoditySerializer(many=True, required=False)
    facilities = OwnSharedFacilitySerializer(many=True, required=False)

    class Meta:
        model = OrganicFarmer
        fields = ['username', 'password', 'email'] + ORGANIC_FIELDS + ['commodities', 'facilities']
        extra_kwargs = {
            # Organic sign-up insists on an emergency contact
            'emergency_contact_number': {'required': True, 'allow_blank': False},
        }

    def create(self, validated_data):
        return RegistrationService.register_organic_farmer(validated_data)


class OrganicFarmerUpdateSerializer(serializers.ModelSerializer):
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    commodities = AgriculturalCommoditySerializer(many=True, required=False)
    facilities = OwnSharedFacilitySerializer(many=True, required=False)

    class Meta:
        model = OrganicFarmer
        fields = ['username', 'email'] + ORGANIC_FIELDS + ['commodities', 'facilities']

    def validate_username(self, value):
        if RegistrationService.username_taken(value, exclude_user=self.instance.user):
            raise serializers.ValidationError("Username already exists")
        return value

    def update(self, instance, validated_data):
        return RegistrationService.update_organic_farmer(instance, validated_data)
