from django.urls import path

from . import views

app_name = 'allocations'

urlpatterns = [
    path('', views.AllocationListCreateView.as_view(), name='allocation-list'),
    path('recipient/', views.RecipientLookupView.as_view(), name='recipient-lookup'),
    path('<int:pk>/', views.AllocationDetailView.as_view(), name='allocation-detail'),
    path('<int:pk>/approve/', views.AllocationApproveView.as_view(), name='allocation-approve'),
]
