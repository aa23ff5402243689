"""Bookings API views.

List and create bookings on the same endpoint (auth required). Staff see
every booking, guests their own. Supports filtering by status, user_id and
number_of_people and ordering by booked_at, created_at, status or
number_of_people. Retrieve/patch/delete a single booking (owner or staff).
"""

from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from bookings import services
from bookings.models import Booking
from common.pagination import StandardPagination
from common.permissions import is_staff
from .permissions import IsOwnerOrAdmin
from .serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer

ORDERING_FIELDS = {"booked_at", "created_at", "status", "number_of_people"}


# ----------------------------- helpers (module-level) -----------------------------

def _apply_filters_and_ordering(qs, params):
    """Filter by status/user/party size and apply ordering; raises ValidationError on bad input."""
    v = params.get("status")
    if v:
        v = v.strip().upper()
        if v not in Booking.Status.values:
            raise ValidationError({"status": f"Allowed values: {', '.join(Booking.Status.values)}."})
        qs = qs.filter(status=v)

    v = params.get("user_id")
    if v:
        if not (v.isascii() and v.isdigit()):
            raise ValidationError({"user_id": "Must be an integer."})
        qs = qs.filter(user_id=int(v))

    v = params.get("number_of_people")
    if v:
        if not (v.isascii() and v.isdigit()):
            raise ValidationError({"number_of_people": "Must be an integer."})
        qs = qs.filter(number_of_people=int(v))

    ordering = params.get("ordering")
    if ordering:
        if ordering.lstrip("-") not in ORDERING_FIELDS:
            raise ValidationError(
                {"ordering": f"Allowed values: {', '.join(sorted(ORDERING_FIELDS))} (prefix '-' for descending)."}
            )
        return qs.order_by(ordering, "id")
    return qs.order_by("-booked_at", "id")


def _check_customer_changes(data):
    """Guests may move or resize their booking, or cancel it; nothing else."""
    new_status = data.get("status")
    if new_status is not None and new_status != Booking.Status.CANCELLED_BY_CUSTOMER:
        raise PermissionDenied("You may only cancel your booking.")


# --------------------------------------- views ---------------------------------------

class BookingListCreateAPIView(generics.ListCreateAPIView):
    """GET: list bookings (filter/order). POST: create a booking."""

    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination

    def get_queryset(self):
        qs = Booking.objects.select_related("user")
        if not is_staff(self.request.user):
            qs = qs.filter(user=self.request.user)
        return _apply_filters_and_ordering(qs, self.request.query_params)

    def create(self, request, *args, **kwargs):
        data = request.data.copy() if hasattr(request.data, "copy") else dict(request.data)
        data.setdefault("user_id", request.user.id)
        serializer = BookingCreateSerializer(data=data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(**serializer.validated_data)
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single booking (owner or staff)."""

    queryset = Booking.objects.select_related("user")
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def partial_update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if not is_staff(request.user):
            _check_customer_changes(serializer.validated_data)
        booking = services.update_booking(instance.pk, serializer.validated_data)
        return Response(self.get_serializer(booking).data, status=status.HTTP_200_OK)
