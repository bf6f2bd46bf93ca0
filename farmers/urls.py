from django.urls import path

from . import views, organic_views, scanner_views

# Regular farmers: /api/farmers/
farmer_urlpatterns = [
    path('', views.FarmerListView.as_view(), name='farmer-list'),
    path('register/', views.FarmerRegistrationView.as_view(), name='farmer-register'),
    path('latest/', views.LatestFarmerView.as_view(), name='farmer-latest'),
    path('profile/', views.MyFarmerProfileView.as_view(), name='farmer-profile'),
    path('test-sms/', views.TestSMSView.as_view(), name='test-sms'),
    path('<int:pk>/', views.FarmerDetailView.as_view(), name='farmer-detail'),
    path('<int:pk>/status/', views.FarmerStatusUpdateView.as_view(), name='farmer-status'),
    path('<int:pk>/notifications/', views.FarmerNotificationLogView.as_view(), name='farmer-notifications'),
    path('<int:pk>/print/', views.FarmerProfilePrintView.as_view(), name='farmer-print'),
    path('<int:pk>/qr-code/', views.FarmerQRCodeView.as_view(), name='farmer-qr-code'),
]

# Organic farmers: /api/organic-farmers/
organic_urlpatterns = [
    path('', organic_views.OrganicFarmerListView.as_view(), name='organic-farmer-list'),
    path('register/', organic_views.OrganicFarmerRegistrationView.as_view(), name='organic-farmer-register'),
    path('latest/', organic_views.LatestOrganicFarmerView.as_view(), name='organic-farmer-latest'),
    path('profile/', organic_views.MyOrganicFarmerProfileView.as_view(), name='organic-farmer-profile'),
    path('<int:pk>/', organic_views.OrganicFarmerDetailView.as_view(), name='organic-farmer-detail'),
    path('<int:pk>/status/', organic_views.OrganicFarmerStatusUpdateView.as_view(), name='organic-farmer-status'),
    path(
        '<int:pk>/notifications/',
        organic_views.OrganicFarmerNotificationLogView.as_view(),
        name='organic-farmer-notifications'
    ),
    path('<int:pk>/print/', organic_views.OrganicFarmerProfilePrintView.as_view(), name='organic-farmer-print'),
    path('<int:pk>/qr-code/', organic_views.OrganicFarmerQRCodeView.as_view(), name='organic-farmer-qr-code'),
]

# Scanner: /api/scanner/
scanner_urlpatterns = [
    path('lookup/', scanner_views.ScannerLookupView.as_view(), name='scanner-lookup'),
]
