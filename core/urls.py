from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("products.api.urls")),
    path("api/", include("orders.api.urls")),
    path("api/", include("bookings.api.urls")),
    path("api/", include("notifications.api.urls")),
    path("api/", include("contacts.api.urls")),
]

urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
