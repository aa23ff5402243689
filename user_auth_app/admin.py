from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()

# Re-register the user model with the profile columns (idempotent).
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list with id, phone number, verification state and admin flags.
    """
    list_display = (
        "id",
        "username",
        "email",
        "phone_number_display",
        "email_verified_display",
        "is_staff",
        "is_superuser",
        "is_active",
        "date_joined",
        "last_login",
    )
    list_select_related = ("profile",)
    ordering = ("-date_joined", "-id")
    search_fields = ("username", "email", "profile__phone_number")
    list_filter = ("is_staff", "is_superuser", "is_active", "profile__email_verified")

    def phone_number_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "phone_number", "") or ""
    phone_number_display.short_description = "phone number"
    phone_number_display.admin_order_field = "profile__phone_number"

    @admin.display(boolean=True, description="email verified")
    def email_verified_display(self, obj):
        prof = getattr(obj, "profile", None)
        return bool(getattr(prof, "email_verified", False))
