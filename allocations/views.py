"""
Allocation Views (admin only)
"""
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsRegistryAdmin
from farmers.services.scanner import REGISTRANT_TYPES, parse_scanned_id

from .models import Allocation
from .serializers import AllocationSerializer, AllocationCreateSerializer
from .services import AllocationService


def allocation_queryset():
    return Allocation.objects.prefetch_related('recipients__farmer', 'recipients__organic_farmer')


class AllocationListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/allocations/ - every allocation, newest first
    POST /api/allocations/ - grant an allocation to one farmer
    """
    permission_classes = [IsRegistryAdmin]
    serializer_class = AllocationSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['approved', 'allocation_type']
    search_fields = [
        'allocation_type',
        'recipients__farmer__first_name', 'recipients__farmer__surname',
        'recipients__organic_farmer__first_name', 'recipients__organic_farmer__surname',
    ]
    ordering_fields = ['created_at', 'amount']
    ordering = ['-created_at', '-id']

    def get_queryset(self):
        return allocation_queryset()

    def create(self, request, *args, **kwargs):
        serializer = AllocationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        allocation = AllocationService.create_allocation(**serializer.validated_data)
        allocation = allocation_queryset().get(pk=allocation.pk)
        return Response(AllocationSerializer(allocation).data, status=status.HTTP_201_CREATED)


class AllocationDetailView(generics.RetrieveAPIView):
    """GET /api/allocations/<id>/"""
    permission_classes = [IsRegistryAdmin]
    serializer_class = AllocationSerializer

    def get_queryset(self):
        return allocation_queryset()


class AllocationApproveView(APIView):
    """POST /api/allocations/<id>/approve/"""
    permission_classes = [IsRegistryAdmin]

    def post(self, request, pk):
        allocation = get_object_or_404(allocation_queryset(), pk=pk)
        AllocationService.approve(allocation, approved_by=request.user)
        return Response(AllocationSerializer(allocation).data)


class RecipientLookupView(APIView):
    """
    GET /api/allocations/recipient/?type=farmer|organic_farmer&id=<id>

    Finds a would-be recipient regardless of application status.
    """
    permission_classes = [IsRegistryAdmin]

    def get(self, request):
        registrant_type = request.query_params.get('type', 'farmer')
        model = REGISTRANT_TYPES.get(registrant_type)
        if model is None:
            return Response(
                {'error': f"type must be one of: {', '.join(REGISTRANT_TYPES)}"},
                status=status.HTTP_400_BAD_REQUEST
            )

        pk = parse_scanned_id(request.query_params.get('id', ''))
        registrant = model.objects.filter(pk=pk).first() if pk is not None else None
        if registrant is None:
            return Response({'error': 'Farmer not found'}, status=status.HTTP_404_NOT_FOUND)

        return Response({
            'id': registrant.pk,
            'type': registrant_type,
            'full_name': registrant.full_name,
            'first_name': registrant.first_name,
            'surname': registrant.surname,
            'municipality_city': registrant.municipality_city,
            'status': registrant.status,
            'farmer_image': registrant.farmer_image,
        })
