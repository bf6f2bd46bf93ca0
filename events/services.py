"""
Event Service

Calendar windows and role-based visibility for events.
"""
from collections import OrderedDict
from datetime import datetime, time, timedelta

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from .models import Event

UPCOMING_LIMIT = 5


def _local_midnight(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def month_bounds(month, year):
    """
    Half-open [start, end) window covering a calendar month in local time.

    Raises ValueError for a month outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    start = _local_midnight(datetime(year, month, 1).date())
    end = _local_midnight((datetime(year, month, 1) + relativedelta(months=1)).date())
    return start, end


def day_bounds(day):
    start = _local_midnight(day)
    return start, _local_midnight(day + timedelta(days=1))


class EventService:
    """Service for event lookups."""

    @staticmethod
    def visible_events(user):
        """Farmers only see events flagged for their registrant type."""
        queryset = Event.objects.all()
        if user.role == 'FARMER':
            queryset = queryset.filter(for_farmers=True)
        elif user.role == 'ORGANIC_FARMER':
            queryset = queryset.filter(for_organic_farmers=True)
        return queryset

    @staticmethod
    def by_month(user, month, year):
        start, end = month_bounds(month, year)
        return EventService.visible_events(user).filter(
            event_date__gte=start, event_date__lt=end
        ).order_by('event_date', 'id')

    @staticmethod
    def by_date(user, day):
        start, end = day_bounds(day)
        return EventService.visible_events(user).filter(
            event_date__gte=start, event_date__lt=end
        ).order_by('event_date', 'id')

    @staticmethod
    def calendar(user, month, year, serialize=None):
        """
        Events of the month keyed by local ISO date, in date order.

        ``serialize`` turns each event into its output form; the event
        itself is stored when omitted.
        """
        buckets = OrderedDict()
        for event in EventService.by_month(user, month, year):
            key = timezone.localtime(event.event_date).date().isoformat()
            buckets.setdefault(key, []).append(serialize(event) if serialize else event)
        return buckets

    @staticmethod
    def upcoming(user, limit=UPCOMING_LIMIT):
        return EventService.visible_events(user).filter(
            event_date__gte=timezone.now()
        ).order_by('event_date', 'id')[:limit]
