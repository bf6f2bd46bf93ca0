"""
Event Views

Administrators manage events; every registry role can browse the ones
visible to it.
"""
import logging

import django_filters
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminOrRegistrant, IsRegistryAdmin

from .models import Event
from .serializers import (
    EventSerializer,
    MonthQuerySerializer,
    DateQuerySerializer,
    UpcomingQuerySerializer,
)
from .services import EventService

logger = logging.getLogger(__name__)


class EventFilter(django_filters.FilterSet):
    class Meta:
        model = Event
        fields = ['for_farmers', 'for_organic_farmers']


class AdminWritePermissionMixin:
    """Reads are open to every registry role, writes to admins only."""

    def get_permissions(self):
        if self.request.method in ('GET', 'HEAD', 'OPTIONS'):
            return [IsAdminOrRegistrant()]
        return [IsRegistryAdmin()]


class EventListCreateView(AdminWritePermissionMixin, generics.ListCreateAPIView):
    """
    GET  /api/events/ - paginated, newest event date first
    POST /api/events/ - create an event (admin)
    """
    serializer_class = EventSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = EventFilter

    def get_queryset(self):
        return EventService.visible_events(self.request.user).order_by('-event_date', '-id')

    def perform_create(self, serializer):
        event = serializer.save(created_by=self.request.user)
        logger.info(f"Event #{event.pk} '{event.title}' created by {self.request.user.username}")


class EventDetailView(AdminWritePermissionMixin, generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/PUT/DELETE /api/events/<id>/"""
    serializer_class = EventSerializer

    def get_queryset(self):
        return EventService.visible_events(self.request.user)

    def perform_destroy(self, instance):
        logger.info(f"Event #{instance.pk} deleted by {self.request.user.username}")
        instance.delete()


class EventsByMonthView(APIView):
    """GET /api/events/by-month/?month=1-12&year=YYYY"""
    permission_classes = [IsAdminOrRegistrant]

    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        events = EventService.by_month(request.user, **query.validated_data)
        return Response(EventSerializer(events, many=True).data)


class EventsByDateView(APIView):
    """GET /api/events/by-date/?date=YYYY-MM-DD"""
    permission_classes = [IsAdminOrRegistrant]

    def get(self, request):
        query = DateQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        events = EventService.by_date(request.user, query.validated_data['date'])
        return Response(EventSerializer(events, many=True).data)


class EventCalendarView(APIView):
    """
    GET /api/events/calendar/?month=1-12&year=YYYY

    Returns ``{"2024-03-05": [event, ...], ...}`` for days that have events.
    """
    permission_classes = [IsAdminOrRegistrant]

    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        calendar = EventService.calendar(
            request.user,
            serialize=lambda event: EventSerializer(event).data,
            **query.validated_data
        )
        return Response(calendar)


class UpcomingEventsView(APIView):
    """GET /api/events/upcoming/?limit=5"""
    permission_classes = [IsAdminOrRegistrant]

    def get(self, request):
        query = UpcomingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        events = EventService.upcoming(request.user, limit=query.validated_data['limit'])
        return Response(EventSerializer(events, many=True).data)
