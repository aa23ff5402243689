"""Orders API views.

Expose the cart, the favourites list and placed orders:
- `users/{user_id}/cart/...` read, add, change, remove, clear and check out,
- `users/{user_id}/favourites/...` list, add and remove,
- `orders/` and `users/{user_id}/orders/` list and place orders,
- `orders/{id}/` read (owner or staff), lifecycle update and delete (staff).
"""

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from common.permissions import is_staff
from orders import services
from orders.models import Order
from .permissions import IsOrderOwnerReadOrAdmin, IsOwnerOrAdmin
from .serializers import (
    PLACED_STATUSES,
    CartItemAddSerializer,
    CartItemUpdateSerializer,
    CartLineSerializer,
    FavouriteAddSerializer,
    OrderCreateSerializer,
    OrderOutputSerializer,
    OrderUpdateSerializer,
    favourite_representation,
)

User = get_user_model()

TRUTHY = {"true", "1"}
FALSY = {"false", "0"}
ORDERING_FIELDS = {"status", "total_price", "created_at", "accepted_at", "delivered_at", "received_at"}


# ----------------------------- helpers (module-level) -----------------------------

def _bool_param(params, name, default):
    raw = params.get(name)
    if raw is None:
        return default
    raw = raw.lower()
    if raw in TRUTHY:
        return True
    if raw in FALSY:
        return False
    raise ValidationError({name: "Must be true or false."})


def _cart_payload(cart, include_product=True):
    lines = services.list_cart_items(cart)
    return {
        "cart_id": cart.id,
        "items": CartLineSerializer(lines, many=True, context={"include_product": include_product}).data,
    }


class UserScopedView(APIView):
    """Base for `users/{user_id}/...` routes: owner or staff, unknown user -> 404."""

    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.owner = get_object_or_404(User, pk=kwargs["user_id"])


# --------------------------------------- cart ---------------------------------------

class CartView(UserScopedView):
    """GET: the cart with its lines; DELETE: remove all lines."""

    def get(self, request, user_id):
        include_product = _bool_param(request.query_params, "include_product", True)
        cart = services.get_or_create_cart(self.owner.id)
        return Response(_cart_payload(cart, include_product), status=status.HTTP_200_OK)

    def delete(self, request, user_id):
        cart = services.clear_cart(services.get_or_create_cart(self.owner.id))
        return Response({"cart_id": cart.id, "items": []}, status=status.HTTP_200_OK)


class CartItemsView(UserScopedView):
    """POST: add a product (201 new line, 200 when an existing line grew)."""

    def post(self, request, user_id):
        serializer = CartItemAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line, created = services.add_cart_item(
            self.owner.id,
            serializer.validated_data["product_id"],
            serializer.validated_data["quantity"],
        )
        return Response(
            CartLineSerializer(line).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class CartItemDetailView(UserScopedView):
    """PATCH: set a line's quantity; DELETE: remove the line."""

    def patch(self, request, user_id, line_id):
        serializer = CartItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line = services.update_cart_item(self.owner.id, line_id, serializer.validated_data["quantity"])
        return Response(CartLineSerializer(line).data, status=status.HTTP_200_OK)

    def delete(self, request, user_id, line_id):
        services.remove_cart_item(self.owner.id, line_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CheckoutView(UserScopedView):
    """POST: place the cart as an order -> {"order_id", "total"}."""

    def post(self, request, user_id):
        order, total = services.checkout(self.owner.id)
        return Response({"order_id": order.id, "total": f"{total:.2f}"}, status=status.HTTP_201_CREATED)


# ------------------------------------ favourites ------------------------------------

class FavouritesView(UserScopedView):
    """GET: favourited products (live data); POST: favourite a product."""

    def get(self, request, user_id):
        lines = services.list_favourites(self.owner.id)
        context = {"request": request}
        return Response(
            [favourite_representation(line, context) for line in lines],
            status=status.HTTP_200_OK,
        )

    def post(self, request, user_id):
        serializer = FavouriteAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line, created = services.add_favourite(self.owner.id, serializer.validated_data["product_id"])
        return Response(
            favourite_representation(line, {"request": request}),
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class FavouriteDetailView(UserScopedView):
    """DELETE: un-favourite by favourites line id."""

    def delete(self, request, user_id, line_id):
        services.remove_favourite(self.owner.id, line_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# -------------------------------------- orders --------------------------------------

class OrderListCreateAPIView(generics.ListCreateAPIView):
    """GET: placed orders (staff: all, customers: own) with filters.
    POST: place an order from a list of items.
    """

    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    pagination_class = StandardPagination
    serializer_class = OrderOutputSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["include_lines"] = _bool_param(self.request.query_params, "include_lines", False)
        return context

    def get_queryset(self):
        qs = services.placed_orders()
        user = self.request.user
        if not is_staff(user):
            qs = qs.filter(user=user)
        if "user_id" in self.kwargs:
            get_object_or_404(User, pk=self.kwargs["user_id"])
            qs = qs.filter(user_id=self.kwargs["user_id"])
        qs = self._apply_filters(qs, self.request.query_params)
        return self._apply_ordering(qs, self.request.query_params.get("ordering"))

    # --- helpers ---
    def _apply_filters(self, qs, params):
        status_value = params.get("status")
        if status_value is not None:
            status_value = status_value.strip().upper()
            if status_value not in PLACED_STATUSES:
                raise ValidationError({"status": f"Allowed values: {', '.join(PLACED_STATUSES)}."})
            qs = qs.filter(status=status_value)

        user_id = params.get("user_id")
        if user_id is not None:
            if not (user_id.isascii() and user_id.isdigit()):
                raise ValidationError({"user_id": "Must be an integer."})
            qs = qs.filter(user_id=int(user_id))
        return qs

    def _apply_ordering(self, qs, ordering):
        if not ordering:
            return qs.order_by("-created_at", "id")
        if ordering.lstrip("-") not in ORDERING_FIELDS:
            raise ValidationError(
                {"ordering": f"Allowed values: {', '.join(sorted(ORDERING_FIELDS))} (prefix '-' for descending)."}
            )
        return qs.order_by(ordering, "id")

    def create(self, request, *args, **kwargs):
        """Validate and place the order, returning it with its lines."""
        data = request.data.copy() if hasattr(request.data, "copy") else dict(request.data)
        if "user_id" in self.kwargs:
            data["user_id"] = self.kwargs["user_id"]
        data.setdefault("user_id", request.user.id)

        serializer = OrderCreateSerializer(data=data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        order = services.create_order(
            serializer.validated_data["user_id"], serializer.validated_data["items"]
        )
        return Response(
            OrderOutputSerializer(order, context={"include_lines": True}).data,
            status=status.HTTP_201_CREATED,
        )


class OrderDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: order with lines (owner or staff).
    PATCH: lifecycle update (staff). DELETE: soft delete (staff).
    """

    permission_classes = [IsAuthenticated, IsOrderOwnerReadOrAdmin]
    serializer_class = OrderOutputSerializer
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return services.placed_orders()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["include_lines"] = True
        return context

    def partial_update(self, request, *args, **kwargs):
        """Run the lifecycle update and return the full order."""
        instance = self.get_object()
        serializer = OrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.update_order(instance.pk, serializer.validated_data)
        return Response(self.get_serializer(order).data, status=status.HTTP_200_OK)
