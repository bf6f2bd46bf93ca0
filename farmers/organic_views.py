"""
Organic Farmer Registry Views

Same endpoints as regular farmers, backed by the organic farmer model.
"""
from accounts.permissions import IsOrganicFarmer

from .filters import OrganicFarmerFilter
from .models import OrganicFarmer
from .organic_serializers import (
    OrganicFarmerListSerializer,
    OrganicFarmerDetailSerializer,
    OrganicFarmerRegistrationSerializer,
    OrganicFarmerUpdateSerializer,
)
from .views import (
    BaseRegistrationView,
    BaseRegistrantListView,
    BaseRegistrantDetailView,
    BaseStatusUpdateView,
    BaseNotificationLogView,
    BaseLatestRegistrantView,
    BaseMyProfileView,
    BaseProfilePrintView,
    BaseQRCodeView,
)


def organic_farmer_queryset():
    return OrganicFarmer.objects.select_related('user').prefetch_related('commodities', 'facilities')


class OrganicFarmerRegistrationView(BaseRegistrationView):
    """POST /api/organic-farmers/register/"""
    serializer_class = OrganicFarmerRegistrationSerializer
    detail_serializer_class = OrganicFarmerDetailSerializer


class OrganicFarmerListView(BaseRegistrantListView):
    """GET /api/organic-farmers/"""
    serializer_class = OrganicFarmerListSerializer
    filterset_class = OrganicFarmerFilter
    queryset_factory = staticmethod(lambda: OrganicFarmer.objects.select_related('user'))


class OrganicFarmerDetailView(BaseRegistrantDetailView):
    """GET/PATCH /api/organic-farmers/<id>/"""
    serializer_class = OrganicFarmerDetailSerializer
    update_serializer_class = OrganicFarmerUpdateSerializer
    queryset_factory = staticmethod(organic_farmer_queryset)


class OrganicFarmerStatusUpdateView(BaseStatusUpdateView):
    """POST /api/organic-farmers/<id>/status/"""
    model = OrganicFarmer


class OrganicFarmerNotificationLogView(BaseNotificationLogView):
    model = OrganicFarmer


class LatestOrganicFarmerView(BaseLatestRegistrantView):
    serializer_class = OrganicFarmerDetailSerializer
    queryset_factory = staticmethod(organic_farmer_queryset)


class MyOrganicFarmerProfileView(BaseMyProfileView):
    """GET /api/organic-farmers/profile/"""
    permission_classes = [IsOrganicFarmer]
    serializer_class = OrganicFarmerDetailSerializer
    queryset_factory = staticmethod(organic_farmer_queryset)


class OrganicFarmerProfilePrintView(BaseProfilePrintView):
    queryset_factory = staticmethod(organic_farmer_queryset)
    filename_prefix = 'organic_farmer'


class OrganicFarmerQRCodeView(BaseQRCodeView):
    model = OrganicFarmer
