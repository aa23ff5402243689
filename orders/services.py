"""Cart, favourites and order services.

Every user owns at most one live cart (`DRAFT` order) and one favourites list
(`FAVOURITES` order). Both are created on first access through
`get_or_create`, backed by a partial unique constraint on (user, status), so
concurrent first requests converge on the same row.

Cart and favourites lines are always looked up inside the caller's current
cart or favourites; a line id from anywhere else is reported as not found.
"""

import logging
from decimal import Decimal

from django.db import transaction
from rest_framework.exceptions import NotFound

from common.exceptions import Conflict, InvalidInput
from notifications.models import Notification
from notifications.services import broadcast, notify
from products.models import Product
from . import lifecycle
from .models import MAX_LINE_QUANTITY, Order, OrderLine

logger = logging.getLogger(__name__)

S = Order.Status


# ------------------------------ helpers ------------------------------

def _check_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidInput("Quantity must be a positive integer.")
    if not 1 <= quantity <= MAX_LINE_QUANTITY:
        raise InvalidInput(f"Quantity must be between 1 and {MAX_LINE_QUANTITY}.")


def _live_product(product_id) -> Product:
    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise NotFound("Product not found.")
    return product


def _line_in(user_id, status, line_id, label) -> OrderLine:
    line = (
        OrderLine.objects.select_related("order", "product")
        .filter(
            pk=line_id,
            order__user_id=user_id,
            order__status=status,
            order__deleted_at__isnull=True,
        )
        .first()
    )
    if line is None:
        raise NotFound(f"{label} not found.")
    return line


def _lock(order: Order) -> Order:
    return Order.objects.select_for_update().get(pk=order.pk)


def order_total(lines) -> Decimal:
    return sum((line.price_snapshot * line.quantity for line in lines), Decimal("0.00"))


def _new_line(order, product, quantity) -> OrderLine:
    return OrderLine.objects.create(
        order=order,
        product=product,
        quantity=quantity,
        name_snapshot=product.name,
        price_snapshot=product.price,
    )


# -------------------------------- cart --------------------------------

def get_or_create_cart(user_id) -> Order:
    cart, _ = Order.objects.get_or_create(user_id=user_id, status=S.DRAFT)
    return cart


def list_cart_items(cart: Order):
    return cart.lines.select_related("product").order_by("created_at", "id")


def add_cart_item(user_id, product_id, quantity=1):
    """Add `quantity` of a product to the cart.

    An existing line for the product is incremented instead of duplicated.
    Returns `(line, created)`.
    """
    _check_quantity(quantity)
    product = _live_product(product_id)

    with transaction.atomic():
        cart = _lock(get_or_create_cart(user_id))
        line = cart.lines.select_for_update().filter(product=product).first()
        if line is None:
            return _new_line(cart, product, quantity), True

        new_quantity = line.quantity + quantity
        if new_quantity > MAX_LINE_QUANTITY:
            raise InvalidInput(f"Quantity must be between 1 and {MAX_LINE_QUANTITY}.")
        line.quantity = new_quantity
        line.save(update_fields=["quantity", "updated_at"])
        return line, False


def update_cart_item(user_id, line_id, quantity) -> OrderLine:
    _check_quantity(quantity)
    line = _line_in(user_id, S.DRAFT, line_id, "Cart item")
    line.quantity = quantity
    line.save(update_fields=["quantity", "updated_at"])
    return line


def remove_cart_item(user_id, line_id):
    _line_in(user_id, S.DRAFT, line_id, "Cart item").delete()


def clear_cart(cart: Order):
    """Remove every line but keep the cart row.

    Fails with Conflict once the order stopped being a cart (e.g. it was
    checked out concurrently); the lines are left untouched then.
    """
    with transaction.atomic():
        locked = _lock(cart)
        if locked.role != Order.Role.CART:
            raise Conflict("Only a draft cart can be cleared.")
        locked.lines.all().delete()
    return locked


def checkout(user_id):
    """Turn the user's cart into a placed order.

    Returns `(order, total)`. The next cart access creates a fresh cart.
    """
    with transaction.atomic():
        cart = _lock(get_or_create_cart(user_id))
        if cart.role != Order.Role.CART:
            raise Conflict("Cart was already checked out.")
        lines = list(cart.lines.all())
        if not lines:
            raise InvalidInput("Cart empty")

        total = order_total(lines)
        cart.status = S.CREATED
        cart.total_price = total
        cart.save(update_fields=["status", "total_price", "updated_at"])

    logger.info("Checked out cart %s for user %s (total %s)", cart.id, user_id, total)
    broadcast(Notification.Type.NEW_ORDER, f"New order {cart.id} placed (total {total}).")
    return cart, total


# ----------------------------- favourites -----------------------------

def get_or_create_favourites(user_id) -> Order:
    favourites, _ = Order.objects.get_or_create(user_id=user_id, status=S.FAVOURITES)
    return favourites


def list_favourites(user_id):
    """Favourite lines whose product is still on the menu."""
    favourites = get_or_create_favourites(user_id)
    return (
        favourites.lines.select_related("product", "product__category")
        .filter(product__deleted_at__isnull=True)
        .order_by("created_at", "id")
    )


def add_favourite(user_id, product_id):
    """Favourite a product; repeated calls return the existing line.

    Returns `(line, created)`.
    """
    product = _live_product(product_id)
    favourites = get_or_create_favourites(user_id)
    return OrderLine.objects.get_or_create(
        order=favourites,
        product=product,
        defaults={
            "quantity": 1,
            "name_snapshot": product.name,
            "price_snapshot": product.price,
        },
    )


def remove_favourite(user_id, line_id):
    _line_in(user_id, S.FAVOURITES, line_id, "Favourite").delete()


# ------------------------------- orders -------------------------------

def placed_orders():
    """Real orders only; carts and favourites are never listed."""
    return Order.objects.exclude(status__in=[S.DRAFT, S.FAVOURITES])


def create_order(user_id, items) -> Order:
    """Place an order directly from `[{"product_id", "quantity"}, ...]`."""
    if not items:
        raise InvalidInput("An order needs at least one item.")

    with transaction.atomic():
        order = Order.objects.create(user_id=user_id, status=S.CREATED)
        lines = {}
        for item in items:
            quantity = item.get("quantity", 1)
            _check_quantity(quantity)
            product = _live_product(item["product_id"])
            if product.pk in lines:
                line = lines[product.pk]
                line.quantity += quantity
                _check_quantity(line.quantity)
                line.save(update_fields=["quantity", "updated_at"])
            else:
                lines[product.pk] = _new_line(order, product, quantity)
        order.total_price = order_total(lines.values())
        order.save(update_fields=["total_price", "updated_at"])

    broadcast(Notification.Type.NEW_ORDER, f"New order {order.id} placed (total {order.total_price}).")
    return order


def update_order(order_id, changes: dict) -> Order:
    """Apply a lifecycle update and emit its milestone notifications.

    The order is saved first; notifications are written afterwards and a
    failing notification never undoes the update. A cart or favourites list
    raises Conflict.
    """
    with transaction.atomic():
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFound("Order not found.")
        events = lifecycle.apply_changes(order, changes)
        order.save()

    if order.user_id is not None:
        for notification_type in events:
            notify(order.user_id, notification_type, lifecycle.message_for(notification_type, order))
    return order
