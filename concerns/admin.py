"""
Concerns Django Admin Configuration
"""
from django.contrib import admin

from .models import Concern, ConcernMessage


class ConcernMessageInline(admin.TabularInline):
    model = ConcernMessage
    extra = 0
    fields = ['sender_type', 'sender', 'content', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['sender']


@admin.register(Concern)
class ConcernAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'farmer', 'organic_farmer', 'status', 'created_at', 'updated_at']
    list_filter = ['status', 'created_at']
    search_fields = ['title', 'description']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['farmer', 'organic_farmer']
    inlines = [ConcernMessageInline]
    actions = ['mark_resolved', 'mark_closed']

    def mark_resolved(self, request, queryset):
        updated = queryset.update(status=Concern.Status.RESOLVED)
        self.message_user(request, f"{updated} concern(s) marked as resolved.")
    mark_resolved.short_description = "Mark selected as resolved"

    def mark_closed(self, request, queryset):
        updated = queryset.update(status=Concern.Status.CLOSED)
        self.message_user(request, f"{updated} concern(s) closed.")
    mark_closed.short_description = "Close selected concerns"
