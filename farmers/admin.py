"""
Farmer Registry Django Admin Configuration
"""
from django.contrib import admin

from .models import (
    Farmer,
    CropFarmingDetails,
    FarmworkerDetails,
    FisherfolkDetails,
    AgriYouthDetails,
    HouseHead,
    FarmParcel,
    OrganicFarmer,
    AgriculturalCommodity,
    OwnSharedFacility,
    ApplicantNotification,
)


class CropFarmingDetailsInline(admin.StackedInline):
    model = CropFarmingDetails
    extra = 0


class FarmworkerDetailsInline(admin.StackedInline):
    model = FarmworkerDetails
    extra = 0


class FisherfolkDetailsInline(admin.StackedInline):
    model = FisherfolkDetails
    extra = 0


class AgriYouthDetailsInline(admin.StackedInline):
    model = AgriYouthDetails
    extra = 0


class HouseHeadInline(admin.StackedInline):
    model = HouseHead
    extra = 0


class FarmParcelInline(admin.TabularInline):
    model = FarmParcel
    extra = 0


@admin.register(Farmer)
class FarmerAdmin(admin.ModelAdmin):
    """Admin interface for regular farmers."""

    list_display = [
        'id', 'surname', 'first_name', 'category_type', 'contact_number',
        'barangay', 'status', 'created_at'
    ]
    list_filter = ['status', 'category_type', 'sex', 'province', 'created_at']
    search_fields = ['surname', 'first_name', 'middle_name', 'government_id', 'contact_number']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    inlines = [
        CropFarmingDetailsInline, FarmworkerDetailsInline, FisherfolkDetailsInline,
        AgriYouthDetailsInline, HouseHeadInline, FarmParcelInline,
    ]


class AgriculturalCommodityInline(admin.TabularInline):
    model = AgriculturalCommodity
    extra = 0


class OwnSharedFacilityInline(admin.TabularInline):
    model = OwnSharedFacility
    extra = 0


@admin.register(OrganicFarmer)
class OrganicFarmerAdmin(admin.ModelAdmin):
    """Admin interface for organic farmers."""

    list_display = [
        'id', 'surname', 'first_name', 'has_organic_certification', 'contact_number',
        'barangay', 'status', 'created_at'
    ]
    list_filter = ['status', 'has_organic_certification', 'certification', 'province', 'created_at']
    search_fields = ['surname', 'first_name', 'middle_name', 'government_id', 'contact_number']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user']
    inlines = [AgriculturalCommodityInline, OwnSharedFacilityInline]


@admin.register(ApplicantNotification)
class ApplicantNotificationAdmin(admin.ModelAdmin):
    """Read-only log of status emails and texts."""

    list_display = ['id', 'channel', 'recipient', 'applicant_status', 'status', 'created_at']
    list_filter = ['channel', 'status', 'applicant_status', 'created_at']
    search_fields = ['recipient', 'failure_reason']
    readonly_fields = [f.name for f in ApplicantNotification._meta.fields]

    def has_add_permission(self, request):
        return False
