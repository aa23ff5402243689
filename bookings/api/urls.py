from django.urls import path
from .views import BookingDetailAPIView, BookingListCreateAPIView

urlpatterns = [
    path("bookings/", BookingListCreateAPIView.as_view(), name="booking-list"),
    path("bookings/<uuid:pk>/", BookingDetailAPIView.as_view(), name="booking-detail"),
]
