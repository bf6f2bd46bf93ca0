"""
Farmer Registry Views

Registration, admin review and self-service endpoints. The base classes
here are shared with the organic farmer views, which only swap the
model, serializers and filters.
"""
import logging

from django.db import IntegrityError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsRegistryAdmin, IsFarmer
from core.sms_service import TextBeeSMSService

from .filters import FarmerFilter
from .models import Farmer
from .serializers import (
    FarmerListSerializer,
    FarmerDetailSerializer,
    FarmerRegistrationSerializer,
    FarmerUpdateSerializer,
    StatusUpdateSerializer,
    ApplicantNotificationSerializer,
    TestSMSSerializer,
)
from .services.profile_pdf import build_profile_pdf
from .services.registration import RegistrationService
from .services.scanner import ScannerService
from .services.status_update import ApplicantStatusService

logger = logging.getLogger(__name__)


def farmer_queryset():
    return Farmer.objects.select_related(
        'user', 'crop_details', 'farmworker_details', 'fisherfolk_details',
        'agri_youth_details', 'house_head',
    ).prefetch_related('parcels__lot')


# =============================================================================
# SHARED BASES
# =============================================================================

class BaseRegistrationView(APIView):
    """
    Public sign-up. New registrants start as APPLICANTS.
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = None
    detail_serializer_class = None

    def post(self, request):
        username = (request.data.get('username') or '').strip()
        if username and RegistrationService.username_taken(username):
            return Response(
                {'error': 'Username already exists'},
                status=status.HTTP_409_CONFLICT
            )

        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            registrant = serializer.save()
        except IntegrityError:
            # Lost a race with another sign-up for the same username
            return Response(
                {'error': 'Username already exists'},
                status=status.HTTP_409_CONFLICT
            )

        return Response(
            self.detail_serializer_class(registrant).data,
            status=status.HTTP_201_CREATED
        )


class BaseRegistrantListView(generics.ListAPIView):
    """
    Admin worklist.

    Query Parameters:
    - status: APPLICANTS, NOT_QUALIFIED, REGISTERED or ARCHIVED
    - search: case-insensitive match on first, middle, last or extension name
    - date_from / date_to: inclusive registration date range (YYYY-MM-DD)
    - page: Page number (default: 1)
    - limit: Items per page (default: 10)
    """
    permission_classes = [IsRegistryAdmin]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    ordering_fields = ['created_at', 'updated_at', 'surname']
    ordering = ['-created_at', '-id']
    queryset_factory = None

    def get_queryset(self):
        return self.queryset_factory()


class BaseRegistrantDetailView(generics.RetrieveUpdateAPIView):
    """
    GET   full record
    PATCH partial admin edit; answers with the full record
    """
    permission_classes = [IsRegistryAdmin]
    http_method_names = ['get', 'patch', 'head', 'options']
    serializer_class = None
    update_serializer_class = None
    queryset_factory = None

    def get_queryset(self):
        return self.queryset_factory()

    def get_serializer_class(self):
        if self.request.method == 'PATCH':
            return self.update_serializer_class
        return self.serializer_class

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        registrant = serializer.save()
        refreshed = self.get_queryset().get(pk=registrant.pk)
        return Response(self.serializer_class(refreshed).data)


class BaseStatusUpdateView(APIView):
    """
    POST {"status": "...", "rejection_reason": "..."}

    Saves the status, then emails and texts the applicant. Notification
    failures do not change the response status; they are reported in
    the ``notifications`` list.
    """
    permission_classes = [IsRegistryAdmin]
    model = None

    def post(self, request, pk):
        registrant = get_object_or_404(self.model.objects.select_related('user'), pk=pk)

        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        registrant, notifications = ApplicantStatusService.update_status(
            registrant,
            serializer.validated_data['status'],
            reason=serializer.validated_data.get('rejection_reason', ''),
            changed_by=request.user,
        )

        return Response({
            'success': True,
            'message': f"Status updated to {registrant.get_status_display()}",
            'id': registrant.id,
            'status': registrant.status,
            'not_qualified_reason': registrant.not_qualified_reason,
            'updated_at': registrant.updated_at,
            'notifications': ApplicantNotificationSerializer(notifications, many=True).data,
        }, status=status.HTTP_200_OK)

    patch = post


class BaseNotificationLogView(generics.ListAPIView):
    """Email/SMS attempts for one registrant, newest first."""
    permission_classes = [IsRegistryAdmin]
    serializer_class = ApplicantNotificationSerializer
    model = None

    def get_queryset(self):
        registrant = get_object_or_404(self.model, pk=self.kwargs['pk'])
        return registrant.notifications.order_by('-created_at', '-id')


class BaseLatestRegistrantView(APIView):
    """
    GET ?id=<optional>

    Most recently registered record, optionally pinned to one id. Used
    by the sign-up success page.
    """
    permission_classes = [IsRegistryAdmin]
    serializer_class = None
    queryset_factory = None

    def get(self, request):
        queryset = self.queryset_factory().order_by('-created_at', '-id')
        pk = request.query_params.get('id')
        if pk:
            if not pk.isdigit():
                return Response({'error': 'id must be numeric'}, status=status.HTTP_400_BAD_REQUEST)
            queryset = queryset.filter(pk=int(pk))

        registrant = queryset.first()
        if registrant is None:
            return Response({'error': 'No farmers found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(self.serializer_class(registrant).data)


class BaseMyProfileView(APIView):
    """The logged-in registrant's own record."""
    serializer_class = None
    queryset_factory = None

    def get(self, request):
        registrant = self.queryset_factory().filter(user=request.user).first()
        if registrant is None:
            return Response({'error': 'Profile not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(self.serializer_class(registrant).data)


class BaseProfilePrintView(APIView):
    """GET returns the full profile as a PDF download."""
    permission_classes = [IsRegistryAdmin]
    queryset_factory = None
    filename_prefix = 'farmer'

    def get(self, request, pk):
        registrant = get_object_or_404(self.queryset_factory(), pk=pk)
        pdf = build_profile_pdf(registrant)

        filename = f"{self.filename_prefix}_{registrant.id}_{timezone.now().strftime('%Y%m%d')}.pdf"
        response = HttpResponse(pdf, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response


class BaseQRCodeView(APIView):
    """GET returns the QR code the scanner reads, as a PNG data URL."""
    permission_classes = [IsRegistryAdmin]
    model = None

    def get(self, request, pk):
        registrant = get_object_or_404(self.model, pk=pk)
        return Response({
            'id': registrant.id,
            'qr_code': ScannerService.qr_code_data_url(registrant),
        })


# =============================================================================
# REGULAR FARMERS
# =============================================================================

class FarmerRegistrationView(BaseRegistrationView):
    """POST /api/farmers/register/"""
    serializer_class = FarmerRegistrationSerializer
    detail_serializer_class = FarmerDetailSerializer


class FarmerListView(BaseRegistrantListView):
    """GET /api/farmers/"""
    serializer_class = FarmerListSerializer
    filterset_class = FarmerFilter
    queryset_factory = staticmethod(lambda: Farmer.objects.select_related('user'))


class FarmerDetailView(BaseRegistrantDetailView):
    """GET/PATCH /api/farmers/<id>/"""
    serializer_class = FarmerDetailSerializer
    update_serializer_class = FarmerUpdateSerializer
    queryset_factory = staticmethod(farmer_queryset)


class FarmerStatusUpdateView(BaseStatusUpdateView):
    """POST /api/farmers/<id>/status/"""
    model = Farmer


class FarmerNotificationLogView(BaseNotificationLogView):
    """GET /api/farmers/<id>/notifications/"""
    model = Farmer


class LatestFarmerView(BaseLatestRegistrantView):
    """GET /api/farmers/latest/"""
    serializer_class = FarmerDetailSerializer
    queryset_factory = staticmethod(farmer_queryset)


class MyFarmerProfileView(BaseMyProfileView):
    """GET /api/farmers/profile/"""
    permission_classes = [IsFarmer]
    serializer_class = FarmerDetailSerializer
    queryset_factory = staticmethod(farmer_queryset)


class FarmerProfilePrintView(BaseProfilePrintView):
    """GET /api/farmers/<id>/print/"""
    queryset_factory = staticmethod(farmer_queryset)
    filename_prefix = 'farmer'


class FarmerQRCodeView(BaseQRCodeView):
    """GET /api/farmers/<id>/qr-code/"""
    model = Farmer


# =============================================================================
# GATEWAY CHECK
# =============================================================================

class TestSMSView(APIView):
    """
    POST /api/farmers/test-sms/

    Sends one message straight through the SMS gateway so admins can
    confirm the credentials work.
    """
    permission_classes = [IsRegistryAdmin]

    def post(self, request):
        serializer = TestSMSSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = TextBeeSMSService().send_sms(
            serializer.validated_data['phone_number'],
            serializer.validated_data['message'],
        )
        http_status = status.HTTP_200_OK if result.get('success') else status.HTTP_502_BAD_GATEWAY
        return Response(result, status=http_status)
