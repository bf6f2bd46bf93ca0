from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    AdminLoginView,
    FarmerLoginView,
    OrganicFarmerLoginView,
    MeView,
    LogoutView,
)

app_name = 'accounts'

urlpatterns = [
    # Authentication endpoints
    path('admin/login/', AdminLoginView.as_view(), name='admin-login'),
    path('farmer/login/', FarmerLoginView.as_view(), name='farmer-login'),
    path('organic-farmer/login/', OrganicFarmerLoginView.as_view(), name='organic-farmer-login'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Current user
    path('me/', MeView.as_view(), name='me'),
]
