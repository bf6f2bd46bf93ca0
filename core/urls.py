"""
URL configuration for the farmer registry.

Farmer, organic farmer and scanner routes live in the farmers app but are
mounted under their own prefixes.
"""
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

from farmers.urls import farmer_urlpatterns, organic_urlpatterns, scanner_urlpatterns

urlpatterns = [
    path('', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),
    path('api/farmers/', include((farmer_urlpatterns, 'farmers'))),
    path('api/organic-farmers/', include((organic_urlpatterns, 'organic_farmers'))),
    path('api/scanner/', include((scanner_urlpatterns, 'scanner'))),
    path('api/concerns/', include('concerns.urls')),
    path('api/events/', include('events.urls')),
    path('api/allocations/', include('allocations.urls')),
    path('api/dashboard/', include('dashboards.urls')),
]
