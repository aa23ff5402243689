from django.urls import path
from .views import (
    CategoryDetailAPIView,
    CategoryListCreateAPIView,
    ProductDetailAPIView,
    ProductListCreateAPIView,
)

urlpatterns = [
    path("categories/", CategoryListCreateAPIView.as_view(), name="category-list"),
    path("categories/<uuid:pk>/", CategoryDetailAPIView.as_view(), name="category-detail"),
    path("products/", ProductListCreateAPIView.as_view(), name="product-list"),
    path("products/<uuid:pk>/", ProductDetailAPIView.as_view(), name="product-detail"),
]
