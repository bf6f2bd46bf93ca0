from decimal import Decimal

from rest_framework import serializers

from farmers.models import Farmer, OrganicFarmer

from .models import Allocation, AllocationRecipient


class AllocationRecipientSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='registrant_type', read_only=True)
    registrant_id = serializers.IntegerField(source='registrant.pk', read_only=True)
    name = serializers.CharField(source='registrant.full_name', read_only=True)
    municipality_city = serializers.CharField(source='registrant.municipality_city', read_only=True)
    status = serializers.CharField(source='registrant.status', read_only=True)
    farmer_image = serializers.CharField(source='registrant.farmer_image', read_only=True)

    class Meta:
        model = AllocationRecipient
        fields = ['type', 'registrant_id', 'name', 'municipality_city', 'status', 'farmer_image']


class AllocationSerializer(serializers.ModelSerializer):
    recipients = AllocationRecipientSerializer(many=True, read_only=True)

    class Meta:
        model = Allocation
        fields = ['id', 'amount', 'allocation_type', 'approved', 'approved_at', 'created_at', 'recipients']
        read_only_fields = fields


class AllocationCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    allocation_type = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    farmer_id = serializers.IntegerField(required=False, allow_null=True)
    organic_farmer_id = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):
        farmer_id = attrs.pop('farmer_id', None)
        organic_farmer_id = attrs.pop('organic_farmer_id', None)

        if (farmer_id is None) == (organic_farmer_id is None):
            raise serializers.ValidationError(
                "Either farmer_id or organic_farmer_id must be set, but not both."
            )

        if farmer_id is not None:
            farmer = Farmer.objects.filter(pk=farmer_id).first()
            if farmer is None:
                raise serializers.ValidationError({'farmer_id': 'Farmer not found.'})
            attrs['farmer'] = farmer
        else:
            organic_farmer = OrganicFarmer.objects.filter(pk=organic_farmer_id).first()
            if organic_farmer is None:
                raise serializers.ValidationError({'organic_farmer_id': 'Organic farmer not found.'})
            attrs['organic_farmer'] = organic_farmer
        return attrs
