from django.urls import path

from . import views

app_name = 'concerns'

urlpatterns = [
    path('', views.ConcernListCreateView.as_view(), name='concern-list'),
    path('<int:pk>/', views.ConcernDetailView.as_view(), name='concern-detail'),
    path('<int:pk>/messages/', views.ConcernMessagesView.as_view(), name='concern-messages'),
    path('<int:pk>/status/', views.ConcernStatusView.as_view(), name='concern-status'),
]
