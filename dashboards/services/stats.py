"""
Registry Dashboard Service

Headline counters for the admin landing page.
"""
from django.utils import timezone

from concerns.models import Concern
from events.models import Event
from farmers.models import ApplicantStatus, Farmer, OrganicFarmer


class RegistryStatsService:
    """Service for the admin dashboard counters"""

    # Applicants are new when they sign up; the other statuses are new
    # when the record was last moved into them.
    STATUS_CHANGE_FIELDS = {
        ApplicantStatus.APPLICANTS: 'created_at',
        ApplicantStatus.REGISTERED: 'updated_at',
        ApplicantStatus.NOT_QUALIFIED: 'updated_at',
    }

    def __init__(self, today=None):
        self.today = today or timezone.localdate()

    def _status_counts(self, model, status):
        queryset = model.objects.filter(status=status)
        date_field = self.STATUS_CHANGE_FIELDS[status]
        return {
            'total': queryset.count(),
            'today': queryset.filter(**{f'{date_field}__date': self.today}).count(),
        }

    def _created_counts(self, model):
        return {
            'total': model.objects.count(),
            'today': model.objects.filter(created_at__date=self.today).count(),
        }

    def get_stats(self):
        """
        Returns:
            dict: ``{total, today}`` pairs per metric
        """
        stats = {}
        for key, status in (
            ('applicants', ApplicantStatus.APPLICANTS),
            ('registered', ApplicantStatus.REGISTERED),
            ('not_qualified', ApplicantStatus.NOT_QUALIFIED),
        ):
            stats[f'farmer_{key}'] = self._status_counts(Farmer, status)
            stats[f'organic_farmer_{key}'] = self._status_counts(OrganicFarmer, status)

        stats['events'] = self._created_counts(Event)
        stats['concerns'] = self._created_counts(Concern)
        stats['as_of'] = self.today.isoformat()
        return stats
