"""Products API views.

List and create categories and products on the same endpoint; retrieve,
patch and delete on the detail route. Reads are public, writes are staff
only. List responses are cached and tagged with an `X-Cache` header; every
write invalidates the cached listings.
"""

import uuid
from decimal import Decimal, InvalidOperation

from django.db.models import Q
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from common.pagination import StandardPagination
from products import listing_cache
from products.models import Category, Product
from .permissions import IsAdminOrReadOnly
from .serializers import CategorySerializer, ProductSerializer


class CachedListMixin:
    """Serve GET list responses from the catalog cache."""

    cache_scope = None

    def list(self, request, *args, **kwargs):
        full_path = request.get_full_path()
        cached = listing_cache.get_listing(self.cache_scope, full_path)
        if cached is not None:
            response = Response(cached)
            response["X-Cache"] = "HIT"
            return response

        response = super().list(request, *args, **kwargs)
        listing_cache.store_listing(self.cache_scope, full_path, response.data)
        response["X-Cache"] = "MISS"
        return response


class CatalogWriteMixin:
    """Invalidate the cached listings after any write."""

    def perform_create(self, serializer):
        super().perform_create(serializer)
        listing_cache.invalidate_listings()

    def perform_update(self, serializer):
        super().perform_update(serializer)
        listing_cache.invalidate_listings()

    def perform_destroy(self, instance):
        super().perform_destroy(instance)
        listing_cache.invalidate_listings()


class CatalogDetailView(CatalogWriteMixin, generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAdminOrReadOnly]
    parser_classes = (JSONParser, FormParser, MultiPartParser)
    http_method_names = ["get", "patch", "delete", "head", "options"]


class CategoryListCreateAPIView(CachedListMixin, CatalogWriteMixin, generics.ListCreateAPIView):
    """GET: cached list of categories; POST: create (staff only)."""

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsAdminOrReadOnly]
    parser_classes = (JSONParser, FormParser, MultiPartParser)
    pagination_class = StandardPagination
    cache_scope = "categories"

    def get_queryset(self):
        qs = super().get_queryset()
        search = self.request.query_params.get("search")
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        return qs.order_by("name", "id")


class CategoryDetailAPIView(CatalogDetailView):
    """GET/PATCH/DELETE a category; deleting it leaves its products uncategorised."""

    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    def perform_destroy(self, instance):
        instance.products.all().update(category=None)
        super().perform_destroy(instance)


class ProductListCreateAPIView(CachedListMixin, CatalogWriteMixin, generics.ListCreateAPIView):
    """GET: cached, paginated list with filters; POST: create (staff only)."""

    queryset = Product.objects.all().select_related("category")
    serializer_class = ProductSerializer
    permission_classes = [IsAdminOrReadOnly]
    parser_classes = (JSONParser, FormParser, MultiPartParser)
    pagination_class = StandardPagination
    cache_scope = "products"

    def get_queryset(self):
        qs = self._apply_filters(super().get_queryset(), self.request.query_params)
        return self._apply_ordering(qs, self.request.query_params.get("ordering"))

    # --- helpers ---
    def _apply_filters(self, qs, params):
        category = params.get("category")
        if category is not None:
            try:
                qs = qs.filter(category_id=uuid.UUID(category))
            except ValueError:
                raise ValidationError({"category": "Must be a valid UUID."})

        for param, lookup in (("min_price", "price__gte"), ("max_price", "price__lte")):
            value = params.get(param)
            if value is None:
                continue
            try:
                amount = Decimal(value)
            except (InvalidOperation, TypeError):
                raise ValidationError({param: "Must be a number."})
            if not amount.is_finite():
                raise ValidationError({param: "Must be a number."})
            qs = qs.filter(**{lookup: amount})

        search = params.get("search")
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        return qs

    def _apply_ordering(self, qs, ordering):
        if not ordering:
            return qs.order_by("-created_at", "id")

        allowed = {"name", "-name", "price", "-price", "created_at", "-created_at"}
        if ordering not in allowed:
            raise ValidationError(
                {"ordering": "Allowed values: name, -name, price, -price, created_at, -created_at."}
            )
        return qs.order_by(ordering, "id")


class ProductDetailAPIView(CatalogDetailView):
    """GET/PATCH/DELETE a product (soft delete keeps existing order lines intact)."""

    queryset = Product.objects.all().select_related("category")
    serializer_class = ProductSerializer
