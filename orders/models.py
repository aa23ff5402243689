"""Orders app models.

One Order table backs three things, told apart by `status`:
- the user's cart (`DRAFT`),
- the user's favourites list (`FAVOURITES`),
- real orders (every other status).

OrderLine rows snapshot the product name and price at the moment the line is
created, so later catalog edits never change an existing cart or order.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from common.models import SoftDeleteModel
from products.models import Product

MAX_LINE_QUANTITY = 999


class Order(SoftDeleteModel):
    """A cart, a favourites list, or a placed order."""

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "draft"
        FAVOURITES = "FAVOURITES", "favourites"
        CREATED = "CREATED", "created"
        PREPARING = "PREPARING", "preparing"
        READY = "READY", "ready"
        DELIVERING = "DELIVERING", "delivering"
        RECEIVED = "RECEIVED", "received"
        CANCELED = "CANCELED", "canceled"

    class Role(models.TextChoices):
        CART = "CART", "cart"
        FAVOURITES = "FAVOURITES", "favourites"
        ORDER = "ORDER", "order"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="orders",
        null=True,
        blank=True,
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CREATED)
    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    accepted_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    received_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "status"],
                condition=Q(status__in=["DRAFT", "FAVOURITES"], deleted_at__isnull=True),
                name="uniq_live_cart_and_favourites_per_user",
            ),
        ]

    @property
    def role(self) -> str:
        if self.status == self.Status.DRAFT:
            return self.Role.CART
        if self.status == self.Status.FAVOURITES:
            return self.Role.FAVOURITES
        return self.Role.ORDER

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Order<{self.id} {self.status}>"


class OrderLine(SoftDeleteModel):
    """One product on an order, with name and price captured at add time."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="lines")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_lines")
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_LINE_QUANTITY)],
    )
    name_snapshot = models.CharField(max_length=50)
    price_snapshot = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )

    class Meta:
        db_table = "order_lines"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "product"],
                condition=Q(deleted_at__isnull=True),
                name="uniq_live_product_per_order",
            ),
        ]

    @property
    def subtotal(self):
        return self.price_snapshot * self.quantity

    def __str__(self) -> str:
        return f"{self.quantity} x {self.name_snapshot}"
