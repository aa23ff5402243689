"""Products API serializers.

Provide serializers for categories and products. `image` accepts either a
multipart upload or a URL string and is always returned as a string.
"""

from decimal import Decimal

from rest_framework import serializers

from common.uploads import FileOrURLField, resolve_image
from ..models import Category, Product


def _save_with_image(serializer, instance, validated_data, folder):
    request = serializer.context.get("request")
    if "image" in validated_data:
        validated_data["image"] = resolve_image(request, validated_data["image"], folder)
    for attr, val in validated_data.items():
        setattr(instance, attr, val)
    instance.save()
    return instance


class CategorySerializer(serializers.ModelSerializer):
    image = FileOrURLField(required=False)

    class Meta:
        model = Category
        fields = ["id", "name", "description", "image", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "name": {"min_length": 2},
            "description": {"required": False, "allow_blank": True},
        }

    def create(self, validated_data):
        return _save_with_image(self, Category(), validated_data, "categories")

    def update(self, instance, validated_data):
        return _save_with_image(self, instance, validated_data, "categories")


class ProductSerializer(serializers.ModelSerializer):
    """Product with its category id and name.

    The category must be a live category; `category_name` is empty when the
    product is uncategorised.
    """

    image = FileOrURLField(required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), required=False, allow_null=True
    )
    category_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "image",
            "category",
            "category_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
        }

    def get_category_name(self, obj):
        category = obj.category
        if category is None or category.is_deleted:
            return ""
        return category.name

    def create(self, validated_data):
        return _save_with_image(self, Product(), validated_data, "products")

    def update(self, instance, validated_data):
        return _save_with_image(self, instance, validated_data, "products")
