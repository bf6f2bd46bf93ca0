"""
Concern Views

Farmers raise concerns and chat with administrators about them.
"""
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminOrRegistrant, IsRegistrant, IsRegistryAdmin

from .filters import ConcernFilter
from .models import Concern
from .serializers import ConcernSerializer, ConcernStatusSerializer, ConcernMessageSerializer
from .services import ConcernService


def get_accessible_concern(user, pk):
    """Fetch a concern, refusing registrants who do not own it."""
    concern = get_object_or_404(Concern.objects.select_related('farmer', 'organic_farmer'), pk=pk)
    if not ConcernService.can_access(user, concern):
        raise PermissionDenied('You do not have access to this concern.')
    return concern


class ConcernListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/concerns/ - concerns visible to the caller
    POST /api/concerns/ - raise a concern (farmers only)

    Query params: search (title/description), date_from, date_to, status,
    page, limit.
    """
    permission_classes = [IsAdminOrRegistrant]
    serializer_class = ConcernSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = ConcernFilter
    ordering_fields = ['updated_at', 'created_at', 'status']
    ordering = ['-updated_at', '-id']

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsRegistrant()]
        return super().get_permissions()

    def get_queryset(self):
        return ConcernService.visible_concerns(self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        concern = ConcernService.create_concern(request.user, **serializer.validated_data)
        return Response(self.get_serializer(concern).data, status=status.HTTP_201_CREATED)


class ConcernDetailView(APIView):
    """GET /api/concerns/<id>/"""
    permission_classes = [IsAdminOrRegistrant]

    def get(self, request, pk):
        concern = get_accessible_concern(request.user, pk)
        return Response(ConcernSerializer(concern).data)


class ConcernMessagesView(APIView):
    """
    GET  /api/concerns/<id>/messages/ - thread, oldest first
    POST /api/concerns/<id>/messages/ - reply as the authenticated role
    """
    permission_classes = [IsAdminOrRegistrant]

    def get(self, request, pk):
        concern = get_accessible_concern(request.user, pk)
        messages = ConcernService.visible_messages(request.user, concern)
        return Response({
            'concern': ConcernSerializer(concern).data,
            'messages': ConcernMessageSerializer(messages, many=True).data,
        })

    def post(self, request, pk):
        concern = get_accessible_concern(request.user, pk)

        serializer = ConcernMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = ConcernService.send_message(
            request.user,
            concern,
            content=serializer.validated_data['content'],
            image=serializer.validated_data.get('image'),
        )
        return Response(ConcernMessageSerializer(message).data, status=status.HTTP_201_CREATED)


class ConcernStatusView(APIView):
    """PATCH /api/concerns/<id>/status/ (admin)"""
    permission_classes = [IsRegistryAdmin]

    def patch(self, request, pk):
        concern = get_object_or_404(Concern, pk=pk)
        serializer = ConcernStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ConcernService.update_status(concern, serializer.validated_data['status'], changed_by=request.user)
        return Response({
            'success': True,
            'id': concern.pk,
            'status': concern.status,
            'updated_at': concern.updated_at,
        })
