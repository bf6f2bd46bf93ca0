from django.contrib import admin

from .models import Allocation, AllocationRecipient


class AllocationRecipientInline(admin.TabularInline):
    model = AllocationRecipient
    extra = 0
    raw_id_fields = ['farmer', 'organic_farmer']


@admin.register(Allocation)
class AllocationAdmin(admin.ModelAdmin):
    list_display = ['id', 'allocation_type', 'amount', 'approved', 'created_at']
    list_filter = ['approved', 'allocation_type', 'created_at']
    search_fields = ['allocation_type']
    readonly_fields = ['created_at', 'approved_at']
    inlines = [AllocationRecipientInline]
