from django.urls import path
from .views import (
    NotificationDetailAPIView,
    NotificationListCreateAPIView,
    NotificationReadAllAPIView,
    NotificationReadAPIView,
)

urlpatterns = [
    path("notifications/", NotificationListCreateAPIView.as_view(), name="notification-list"),
    path("notifications/read-all/", NotificationReadAllAPIView.as_view(), name="notification-read-all"),
    path("notifications/<uuid:pk>/", NotificationDetailAPIView.as_view(), name="notification-detail"),
    path("notifications/<uuid:pk>/read/", NotificationReadAPIView.as_view(), name="notification-read"),
]
