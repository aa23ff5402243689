from django.contrib import admin

from .models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ("subject", "name", "email", "created_at")
    search_fields = ("name", "email", "subject")
    date_hierarchy = "created_at"
    readonly_fields = ("name", "email", "subject", "message", "created_at", "updated_at", "deleted_at")
