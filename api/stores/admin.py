from django.contrib import admin
from .models import Store, ContactSubmission

@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ('store_name', 'location', 'city', 'phone', 'is_primary', 'status', 'updated_at')
    search_fields = ('store_name', 'location', 'city', 'address', 'details')
    list_filter = ('status', 'is_primary', 'state')
    readonly_fields = ('created_at', 'updated_at')
    ordering = ('location',)
    fieldsets = (
        (None, {
            'fields': ('location', 'store_name', 'phone', 'email', 'details')
        }),
        ('Address', {
            'fields': ('address', 'city', 'state', 'zip_code', 'country', 'latitude', 'longitude')
        }),
        ('Settings', {
            'fields': ('is_primary', 'status', 'hours_of_operation')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(ContactSubmission)
class ContactSubmissionAdmin(admin.ModelAdmin):
    list_display = ('name', 'location', 'phone', 'created_at')
    search_fields = ('name', 'phone', 'message')
    list_filter = ('location', 'created_at')
    readonly_fields = ('location', 'name', 'phone', 'message', 'created_at')
    ordering = ('-created_at',)
