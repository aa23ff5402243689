from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("type", "user", "message", "read_at", "created_at")
    list_select_related = ("user",)
    list_filter = ("type",)
    search_fields = ("message", "user__username")
    date_hierarchy = "created_at"
    readonly_fields = ("created_at", "updated_at", "deleted_at")
