from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    """
    Lines of an order; snapshots are read-only.
    """
    model = OrderLine
    extra = 0
    fields = ("product", "quantity", "name_snapshot", "price_snapshot")
    readonly_fields = ("product", "name_snapshot", "price_snapshot")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Order overview:
    - list: id, status badge, role, user, total, created
    - filter: status, created (date hierarchy)
    - search: username, email
    Status changes in the admin bypass the lifecycle notifications; use the API for those.
    """
    inlines = [OrderLineInline]
    list_display = (
        "id",
        "status_badge",
        "role",
        "username",
        "total_price",
        "created_at",
        "updated_at",
    )
    list_select_related = ("user",)
    list_filter = ("status", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("user__username", "user__email")
    readonly_fields = ("user", "total_price", "created_at", "updated_at", "deleted_at")
    fields = (
        "status",
        "user",
        "total_price",
        "accepted_at",
        "delivered_at",
        "received_at",
        "created_at",
        "updated_at",
        "deleted_at",
    )

    def status_badge(self, obj):
        color = {
            "DRAFT": "#9ca3af",
            "FAVOURITES": "#f59e0b",
            "CREATED": "#0ea5e9",
            "PREPARING": "#6366f1",
            "READY": "#14b8a6",
            "DELIVERING": "#8b5cf6",
            "RECEIVED": "#22c55e",
            "CANCELED": "#ef4444",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def username(self, obj):
        return obj.user.username if obj.user_id else ""
    username.short_description = "user"
