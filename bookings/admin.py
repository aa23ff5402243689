from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Status changes in the admin skip the guest notification; use the API for those."""

    list_display = ("id", "user", "number_of_people", "booked_at", "status", "created_at")
    list_select_related = ("user",)
    list_filter = ("status", "booked_at")
    date_hierarchy = "booked_at"
    search_fields = ("user__username", "user__email")
    readonly_fields = ("created_at", "updated_at", "deleted_at")
