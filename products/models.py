"""Products app models.

Defines the menu catalog: categories and the products listed in them. Both
are soft deleted so that order lines keep pointing at a real product row.
"""

from django.core.validators import MinValueValidator
from django.db import models

from common.models import SoftDeleteModel


class Category(SoftDeleteModel):
    """A menu section (e.g. starters, drinks)."""

    name = models.CharField(max_length=50)
    description = models.CharField(max_length=255, blank=True, default="")
    image = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Product(SoftDeleteModel):
    """A dish or drink that can be put into a cart or favourites."""

    name = models.CharField(max_length=50)
    description = models.CharField(max_length=255, blank=True, default="")
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    image = models.CharField(max_length=255, blank=True, default="")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        related_name="products",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} (#{self.pk})"
