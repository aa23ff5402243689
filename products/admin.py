from django.contrib import admin
from django.db.models import Count, Q

from .models import Category, Product


class ProductInline(admin.TabularInline):
    """
    Shows the products of a category directly in the category form.
    """
    model = Product
    extra = 0
    fields = ("name", "price", "description")
    show_change_link = True


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    inlines = [ProductInline]
    list_display = ("name", "product_count_display", "updated_at", "deleted_at")
    search_fields = ("name", "description")
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at", "deleted_at")

    def get_queryset(self, request):
        # soft-deleted rows stay visible to staff; count only live products
        return Category.all_objects.annotate(
            _product_count=Count("products", filter=Q(products__deleted_at__isnull=True))
        )

    def product_count_display(self, obj):
        return getattr(obj, "_product_count", 0)
    product_count_display.short_description = "products"
    product_count_display.admin_order_field = "_product_count"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "updated_at", "deleted_at")
    list_select_related = ("category",)
    search_fields = ("name", "description", "category__name")
    list_filter = ("category",)
    date_hierarchy = "created_at"
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at", "deleted_at")

    def get_queryset(self, request):
        return Product.all_objects.select_related("category")
