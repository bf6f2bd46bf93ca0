"""
Registry pagination.

Pages are plain offset windows: page N with limit L covers records
(N-1)*L+1 .. N*L of the filtered, ordered queryset. Asking for a page
past the end returns an empty result list instead of a 404.
"""
import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


def _positive_int(raw, default, cutoff=None):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    if cutoff:
        return min(value, cutoff)
    return value


class RegistryPagination(PageNumberPagination):
    """Standard pagination for registry listings."""
    page_size = 10
    page_query_param = 'page'
    page_size_query_param = 'limit'
    max_page_size = 100

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = _positive_int(
            request.query_params.get(self.page_size_query_param),
            self.page_size,
            cutoff=self.max_page_size,
        )
        self.current_page = _positive_int(request.query_params.get(self.page_query_param), 1)
        self.total = queryset.count()

        offset = (self.current_page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response_data(self, data):
        """Return pagination metadata with results."""
        return {
            'results': data,
            'total': self.total,
            'pages': math.ceil(self.total / self.limit),
            'current_page': self.current_page,
            'limit': self.limit,
        }

    def get_paginated_response(self, data):
        return Response(self.get_paginated_response_data(data))

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'results': schema,
                'total': {'type': 'integer'},
                'pages': {'type': 'integer'},
                'current_page': {'type': 'integer'},
                'limit': {'type': 'integer'},
            },
        }
