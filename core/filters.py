"""
Shared filter sets.
"""
import django_filters
from django.db.models import Q


def contains_any(fields, value):
    """
    Case-insensitive match of the whole ``value`` inside any one of ``fields``.

    Unlike DRF's ``SearchFilter`` the term is not split into words, so
    "Maria Santos" only matches a field that holds that exact run of text.
    """
    query = Q()
    for field in fields:
        query |= Q(**{f'{field}__icontains': value})
    return query


class CreatedDateRangeFilterSet(django_filters.FilterSet):
    """
    Inclusive date range over ``created_at``.

    Both bounds compare against the local calendar date, so ``date_to``
    covers the whole of that day.
    """
    date_from = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')


class SearchFilterSet(CreatedDateRangeFilterSet):
    """Adds ``?search=`` over the fields named in ``search_fields``."""
    search = django_filters.CharFilter(method='filter_search')

    search_fields = ()

    def filter_search(self, queryset, name, value):
        return queryset.filter(contains_any(self.search_fields, value))
