from django.urls import path
from .views import (
    CartItemDetailView,
    CartItemsView,
    CartView,
    CheckoutView,
    FavouriteDetailView,
    FavouritesView,
    OrderDetailAPIView,
    OrderListCreateAPIView,
)

urlpatterns = [
    path("users/<int:user_id>/cart/", CartView.as_view(), name="cart"),
    path("users/<int:user_id>/cart/items/", CartItemsView.as_view(), name="cart-items"),
    path("users/<int:user_id>/cart/items/<uuid:line_id>/", CartItemDetailView.as_view(), name="cart-item-detail"),
    path("users/<int:user_id>/cart/checkout/", CheckoutView.as_view(), name="cart-checkout"),
    path("users/<int:user_id>/favourites/", FavouritesView.as_view(), name="favourites"),
    path("users/<int:user_id>/favourites/<uuid:line_id>/", FavouriteDetailView.as_view(), name="favourite-detail"),
    path("users/<int:user_id>/orders/", OrderListCreateAPIView.as_view(), name="user-orders"),
    path("orders/", OrderListCreateAPIView.as_view(), name="order-list"),
    path("orders/<uuid:pk>/", OrderDetailAPIView.as_view(), name="order-detail"),
]
