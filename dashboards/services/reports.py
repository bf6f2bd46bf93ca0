"""
Registry Reports Service

Builds the admin reports. Every report covers a created-at window that
defaults to 1 January of the current year up to now, and an optional
applicant status where ``ALL`` means no status filter.
"""
from datetime import datetime, time, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.db.models import Count, Q, Sum
from django.utils import timezone

from allocations.models import Allocation
from concerns.models import Concern
from core.filters import contains_any
from events.models import Event
from farmers.models import Farmer, OrganicFarmer

REPORT_TYPES = [
    'overview',
    'farmers',
    'events',
    'concerns',
    'allocations',
    'allocation-analysis',
    'allocation-types',
]

FARMER_TYPES = ['all', 'farmer', 'organic']

TREND_MONTHS = 12

DATE_FORMAT = '%b %d, %Y'


def _local_midnight(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def _rate(part, whole):
    return round(part / whole * 100, 2) if whole else 0


class RegistryReportService:
    """
    Service for admin reports.

    ``start_date``/``end_date`` are calendar dates; the end date is
    inclusive through the end of that day.
    """

    def __init__(self, start_date=None, end_date=None, status=None, search='', farmer_type='all'):
        now = timezone.now()
        local_now = timezone.localtime(now)

        self.now = now
        self.start = _local_midnight(start_date or local_now.date().replace(month=1, day=1))
        # Half-open upper bound so the whole end date is covered
        self.end = _local_midnight(end_date + timedelta(days=1)) if end_date else None
        self.end_date = end_date
        self.status = None if status in (None, '', 'ALL') else status
        self.search = (search or '').strip()
        self.farmer_type = farmer_type or 'all'

    def period_label(self):
        start = timezone.localtime(self.start).strftime(DATE_FORMAT)
        end = self.end_date.strftime(DATE_FORMAT) if self.end_date else "today"
        return f"{start} - {end}"

    # =========================================================================
    # FILTER HELPERS
    # =========================================================================

    def _date_filter(self, field='created_at'):
        if self.end is None:
            return Q(**{f'{field}__gte': self.start, f'{field}__lte': self.now})
        return Q(**{f'{field}__gte': self.start, f'{field}__lt': self.end})

    def _registrant_filter(self):
        query = self._date_filter()
        if self.status:
            query &= Q(status=self.status)
        return query

    def _search_filter(self, fields):
        if not self.search:
            return Q()
        return contains_any(fields, self.search)

    def _month_windows(self):
        this_month = _local_midnight(timezone.localdate().replace(day=1))
        for offset in range(TREND_MONTHS - 1, -1, -1):
            start = this_month - relativedelta(months=offset)
            yield start, start + relativedelta(months=1)

    # =========================================================================
    # REPORTS
    # =========================================================================

    def generate(self, report_type):
        """Dispatch to the report builder for ``report_type``."""
        builders = {
            'overview': self.get_overview,
            'farmers': self.get_farmers_report,
            'events': self.get_events_report,
            'concerns': self.get_concerns_report,
            'allocations': self.get_allocations_report,
            'allocation-analysis': self.get_allocation_analysis,
            'allocation-types': self.get_allocation_type_stats,
        }
        if report_type not in builders:
            raise ValueError(f"Unknown report type: {report_type}")
        return builders[report_type]()

    def get_overview(self):
        registrant_filter = self._registrant_filter()
        farmers = Farmer.objects.filter(registrant_filter)
        organic_farmers = OrganicFarmer.objects.filter(registrant_filter)

        month_start = _local_midnight(timezone.localdate().replace(day=1))
        month_end = month_start + relativedelta(months=1)
        this_month = Q(created_at__gte=month_start, created_at__lt=month_end)
        status_only = Q(status=self.status) if self.status else Q()

        registration_trends = []
        events_by_month = []
        for start, end in self._month_windows():
            window = Q(created_at__gte=start, created_at__lt=end)
            label = start.strftime('%b %Y')
            registration_trends.append({
                'month': label,
                'farmers': Farmer.objects.filter(window & status_only).count(),
                'organic_farmers': OrganicFarmer.objects.filter(window & status_only).count(),
            })
            events_by_month.append({
                'month': label,
                'events': Event.objects.filter(window).count(),
            })

        return {
            'total_farmers': farmers.count(),
            'total_organic_farmers': organic_farmers.count(),
            'total_events': Event.objects.filter(self._date_filter()).count(),
            'total_concerns': Concern.objects.filter(self._date_filter()).count(),
            'total_allocations': Allocation.objects.filter(self._date_filter()).count(),
            'new_farmers_this_month': Farmer.objects.filter(this_month & status_only).count(),
            'new_organic_farmers_this_month': OrganicFarmer.objects.filter(this_month & status_only).count(),
            'new_events_this_month': Event.objects.filter(this_month).count(),
            'new_concerns_this_month': Concern.objects.filter(this_month).count(),
            'farmers_with_allocations': farmers.filter(allocations__isnull=False).distinct().count(),
            'farmers_without_allocations': farmers.filter(allocations__isnull=True).count(),
            'organic_farmers_with_allocations': organic_farmers.filter(allocations__isnull=False).distinct().count(),
            'organic_farmers_without_allocations': organic_farmers.filter(allocations__isnull=True).count(),
            'allocation_type_stats': self._allocation_type_rows(),
            'registration_trends': registration_trends,
            'events_by_month': events_by_month,
        }

    def get_farmers_report(self):
        query = self._registrant_filter() & self._search_filter([
            'first_name', 'surname', 'user__email', 'municipality_city',
            'barangay', 'province', 'region',
        ])

        farmers_list = []
        if self.farmer_type in ('all', 'farmer'):
            farmers = Farmer.objects.filter(query).select_related(
                'user', 'crop_details'
            ).prefetch_related('parcels', 'allocations__allocation').order_by('-created_at')
            for farmer in farmers:
                crop_details = getattr(farmer, 'crop_details', None)
                farmers_list.append(self._farmer_row(
                    farmer,
                    category=farmer.category_type,
                    hectares=farmer.total_farm_area,
                    primary_crop=crop_details.primary_crop if crop_details else 'Various',
                ))

        if self.farmer_type in ('all', 'organic'):
            organic_farmers = OrganicFarmer.objects.filter(query).select_related(
                'user'
            ).prefetch_related('commodities', 'allocations__allocation').order_by('-created_at')
            for farmer in organic_farmers:
                commodities = list(farmer.commodities.all())
                farmers_list.append(self._farmer_row(
                    farmer,
                    category='ORGANIC_FARMER',
                    hectares=sum((c.size_ha or 0 for c in commodities), Decimal('0')),
                    primary_crop=commodities[0].name if commodities else 'Various',
                ))

        return {'farmers_list': farmers_list}

    @staticmethod
    def _farmer_row(registrant, category, hectares, primary_crop):
        grants = [recipient.allocation for recipient in registrant.allocations.all()]
        return {
            'id': registrant.pk,
            'name': f"{registrant.first_name} {registrant.surname}",
            'email': registrant.email or 'N/A',
            'municipality': registrant.municipality_city,
            'status': registrant.status,
            'category': category,
            'registration_date': timezone.localtime(registrant.created_at).strftime(DATE_FORMAT),
            'hectares': float(hectares or 0),
            'primary_crop': primary_crop,
            'allocation_count': len(grants),
            'allocation_total': float(sum((g.amount for g in grants), Decimal('0'))),
        }

    def get_events_report(self):
        events = Event.objects.filter(
            self._date_filter() & self._search_filter(['title', 'location', 'note'])
        ).order_by('-event_date')

        return {
            'events_list': [
                {
                    'id': event.pk,
                    'title': event.title,
                    'location': event.location,
                    'event_date': timezone.localtime(event.event_date).strftime('%b %d, %Y at %I:%M %p'),
                    'for_farmers': event.for_farmers,
                    'for_organic_farmers': event.for_organic_farmers,
                    'created_date': timezone.localtime(event.created_at).strftime(DATE_FORMAT),
                }
                for event in events
            ]
        }

    def get_concerns_report(self):
        concerns = Concern.objects.filter(
            self._date_filter() & self._search_filter(['title', 'description'])
        ).select_related('farmer', 'organic_farmer').annotate(
            message_count=Count('messages')
        ).order_by('-created_at')

        return {
            'concerns_list': [
                {
                    'id': concern.pk,
                    'title': concern.title,
                    'description': concern.description,
                    'farmer_name': f"{concern.owner.first_name} {concern.owner.surname}",
                    'type': concern.owner_type,
                    'status': concern.status,
                    'message_count': concern.message_count,
                    'created_date': timezone.localtime(concern.created_at).strftime(DATE_FORMAT),
                }
                for concern in concerns
            ]
        }

    def get_allocations_report(self):
        allocations = Allocation.objects.filter(
            self._date_filter() & self._search_filter([
                'allocation_type',
                'recipients__farmer__first_name', 'recipients__farmer__surname',
                'recipients__organic_farmer__first_name', 'recipients__organic_farmer__surname',
            ])
        ).distinct().prefetch_related(
            'recipients__farmer', 'recipients__organic_farmer'
        ).order_by('-created_at')

        allocations_list = []
        for allocation in allocations:
            recipients = []
            for recipient in allocation.recipients.all():
                registrant = recipient.registrant
                recipients.append({
                    'name': f"{registrant.first_name} {registrant.surname}",
                    'municipality': registrant.municipality_city,
                    'type': recipient.registrant_type,
                    'status': registrant.status,
                })
            allocations_list.append({
                'id': allocation.pk,
                'amount': float(allocation.amount),
                'allocation_type': allocation.allocation_type,
                'approved': allocation.approved,
                'created_at': timezone.localtime(allocation.created_at).strftime(DATE_FORMAT),
                'farmers': recipients,
            })

        return {'allocations_list': allocations_list}

    def get_allocation_analysis(self):
        registrant_filter = self._registrant_filter()

        def category_row(label, model):
            queryset = model.objects.filter(registrant_filter)
            total = queryset.count()
            with_allocations = queryset.filter(allocations__isnull=False).distinct().count()
            return {
                'category': label,
                'total_farmers': total,
                'farmers_with_allocations': with_allocations,
                'farmers_without_allocations': total - with_allocations,
                'allocation_rate': _rate(with_allocations, total),
            }

        regular = category_row('Regular Farmers', Farmer)
        organic = category_row('Organic Farmers', OrganicFarmer)

        total = regular['total_farmers'] + organic['total_farmers']
        with_allocations = regular['farmers_with_allocations'] + organic['farmers_with_allocations']
        combined = {
            'category': 'All Farmers',
            'total_farmers': total,
            'farmers_with_allocations': with_allocations,
            'farmers_without_allocations': total - with_allocations,
            'allocation_rate': _rate(with_allocations, total),
        }

        return {
            'allocation_analysis': [regular, organic, combined],
            'total_farmers': total,
            'farmers_with_allocations': with_allocations,
            'farmers_without_allocations': total - with_allocations,
        }

    def get_allocation_type_stats(self):
        return {'allocation_type_stats': self._allocation_type_rows()}

    def _allocation_type_rows(self):
        rows = Allocation.objects.filter(self._date_filter()).values(
            'allocation_type'
        ).annotate(
            count=Count('id'),
            total_amount=Sum('amount'),
        ).order_by('-count', 'allocation_type')

        return [
            {
                'allocation_type': row['allocation_type'] or 'Unknown',
                'count': row['count'],
                'total_amount': float(row['total_amount'] or 0),
            }
            for row in rows
        ]
