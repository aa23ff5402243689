"""Notifications API views.

Customers see the notifications addressed to them; staff additionally see
broadcasts (user-less rows such as NEW_ORDER) and everyone else's. Staff may
post notifications by hand. Deleting is a soft delete.
"""

from django.db.models import Q
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from common.permissions import is_staff
from notifications.models import Notification
from .permissions import IsNotificationRecipientOrAdmin, StaffCreatesNotifications
from .serializers import NotificationSerializer

TRUTHY = {"true", "1"}
FALSY = {"false", "0"}


def _visible_notifications(user):
    qs = Notification.objects.select_related("user")
    if is_staff(user):
        return qs
    return qs.filter(user=user)


def _own_inbox(user):
    """Notifications a user marks as read in bulk (staff include broadcasts)."""
    if is_staff(user):
        return Notification.objects.filter(Q(user=user) | Q(user__isnull=True))
    return Notification.objects.filter(user=user)


class NotificationListCreateAPIView(generics.ListCreateAPIView):
    """GET: paginated inbox with `unread` and `type` filters; POST: staff only."""

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, StaffCreatesNotifications]
    pagination_class = StandardPagination

    def get_queryset(self):
        qs = _visible_notifications(self.request.user)
        params = self.request.query_params

        unread = params.get("unread")
        if unread is not None:
            unread = unread.lower()
            if unread in TRUTHY:
                qs = qs.filter(read_at__isnull=True)
            elif unread in FALSY:
                qs = qs.filter(read_at__isnull=False)
            else:
                raise ValidationError({"unread": "Must be true or false."})

        notification_type = params.get("type")
        if notification_type is not None:
            if notification_type not in Notification.Type.values:
                raise ValidationError({"type": "Unknown notification type."})
            qs = qs.filter(type=notification_type)

        return qs.order_by("-created_at", "id")


class NotificationDetailAPIView(generics.RetrieveDestroyAPIView):
    """GET/DELETE a single notification."""

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, IsNotificationRecipientOrAdmin]

    def get_queryset(self):
        return _visible_notifications(self.request.user)


class NotificationReadAPIView(generics.GenericAPIView):
    """POST /api/notifications/{id}/read/ -> stamp `read_at` once."""

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, IsNotificationRecipientOrAdmin]

    def get_queryset(self):
        return _visible_notifications(self.request.user)

    def post(self, request, *args, **kwargs):
        notification = self.get_object()
        if notification.read_at is None:
            notification.read_at = timezone.now()
            notification.save(update_fields=["read_at", "updated_at"])
        return Response(self.get_serializer(notification).data, status=status.HTTP_200_OK)


class NotificationReadAllAPIView(APIView):
    """POST /api/notifications/read-all/ -> mark the caller's unread inbox as read."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        updated = _own_inbox(request.user).filter(read_at__isnull=True).update(
            read_at=timezone.now()
        )
        return Response({"updated": updated}, status=status.HTTP_200_OK)
