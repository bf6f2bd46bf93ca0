import django_filters

from core.filters import SearchFilterSet

from .models import Concern


class ConcernFilter(SearchFilterSet):
    status = django_filters.ChoiceFilter(choices=Concern.Status.choices)

    search_fields = ['title', 'description']

    class Meta:
        model = Concern
        fields = ['status']
