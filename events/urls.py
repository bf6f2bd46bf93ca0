from django.urls import path

from . import views

app_name = 'events'

urlpatterns = [
    path('', views.EventListCreateView.as_view(), name='event-list'),
    path('by-month/', views.EventsByMonthView.as_view(), name='events-by-month'),
    path('by-date/', views.EventsByDateView.as_view(), name='events-by-date'),
    path('calendar/', views.EventCalendarView.as_view(), name='event-calendar'),
    path('upcoming/', views.UpcomingEventsView.as_view(), name='events-upcoming'),
    path('<int:pk>/', views.EventDetailView.as_view(), name='event-detail'),
]
