"""Orders API serializers.

Input serializers for cart, favourites and order requests, and output
serializers for lines and orders. Line output always carries the name and
price snapshot; the live product is attached only on request.
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers

from common.permissions import is_staff
from orders.models import MAX_LINE_QUANTITY, Order, OrderLine
from products.api.serializers import ProductSerializer

User = get_user_model()

PLACED_STATUSES = [
    s for s in Order.Status.values if s not in (Order.Status.DRAFT, Order.Status.FAVOURITES)
]


# ------------------------------- input -------------------------------

class CartItemAddSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY, default=1)


class CartItemUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)


class FavouriteAddSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


class OrderCreateSerializer(serializers.Serializer):
    """Input for placing an order directly.

    `user_id` is honoured for staff only; everyone else orders for themselves.
    """

    user_id = serializers.IntegerField(required=False)
    items = CartItemAddSerializer(many=True, allow_empty=False)

    def validate_user_id(self, value):
        user = getattr(self.context.get("request"), "user", None)
        if not is_staff(user) and (user is None or value != user.id):
            raise serializers.ValidationError("You can only place orders for yourself.")
        if not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("User not found.")
        return value


class OrderUpdateSerializer(serializers.Serializer):
    """Lifecycle update: status, milestone timestamps and total price."""

    status = serializers.ChoiceField(choices=PLACED_STATUSES, required=False)
    accepted_at = serializers.DateTimeField(required=False, allow_null=True)
    delivered_at = serializers.DateTimeField(required=False, allow_null=True)
    received_at = serializers.DateTimeField(required=False, allow_null=True)
    total_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False
    )

    def to_internal_value(self, data):
        if hasattr(data, "get") and isinstance(data.get("status"), str):
            data = data.copy()
            data["status"] = data["status"].strip().upper()
        return super().to_internal_value(data)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one field to update.")
        return attrs


# ------------------------------- output -------------------------------

class ProductBriefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image = serializers.CharField()


class OrderLineSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderLine
        fields = [
            "id",
            "product_id",
            "quantity",
            "name_snapshot",
            "price_snapshot",
            "subtotal",
            "created_at",
        ]


class CartLineSerializer(OrderLineSerializer):
    """Line plus the live product when the view asks for it."""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if self.context.get("include_product", True):
            data["product"] = ProductBriefSerializer(instance.product).data
        return data


def favourite_representation(line, context=None):
    """Live product representation plus the favourites line id."""
    data = ProductSerializer(line.product, context=context).data
    data["favourite_detail_id"] = line.id
    return data


class OrderOutputSerializer(serializers.ModelSerializer):
    """Read serializer for a placed order; `lines` only when requested."""

    user_id = serializers.IntegerField(read_only=True, allow_null=True)
    lines = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "status",
            "total_price",
            "accepted_at",
            "delivered_at",
            "received_at",
            "created_at",
            "updated_at",
            "lines",
        ]

    def get_lines(self, obj):
        return OrderLineSerializer(obj.lines.all(), many=True).data

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self.context.get("include_lines", False):
            data.pop("lines", None)
        return data
