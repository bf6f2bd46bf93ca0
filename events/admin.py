from django.contrib import admin

from .models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'location', 'event_date', 'for_farmers', 'for_organic_farmers']
    list_filter = ['for_farmers', 'for_organic_farmers', 'event_date']
    search_fields = ['title', 'location', 'note']
    date_hierarchy = 'event_date'
    readonly_fields = ['created_at', 'updated_at']
