import django_filters

from core.filters import SearchFilterSet

from .models import ApplicantStatus, Farmer, OrganicFarmer


# Name fields matched by ?search=
NAME_SEARCH_FIELDS = ['first_name', 'middle_name', 'surname', 'extension_name']


class FarmerFilter(SearchFilterSet):
    status = django_filters.ChoiceFilter(choices=ApplicantStatus.choices)
    category_type = django_filters.ChoiceFilter(choices=Farmer.CategoryType.choices)

    search_fields = NAME_SEARCH_FIELDS

    class Meta:
        model = Farmer
        fields = ['status', 'category_type', 'barangay', 'municipality_city']


class OrganicFarmerFilter(SearchFilterSet):
    status = django_filters.ChoiceFilter(choices=ApplicantStatus.choices)

    search_fields = NAME_SEARCH_FIELDS

    class Meta:
        model = OrganicFarmer
        fields = ['status', 'has_organic_certification', 'barangay', 'municipality_city']
