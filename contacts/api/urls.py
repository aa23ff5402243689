from django.urls import path
from .views import ContactDetailAPIView, ContactListCreateAPIView

urlpatterns = [
    path("contacts/", ContactListCreateAPIView.as_view(), name="contact-list"),
    path("contacts/<uuid:pk>/", ContactDetailAPIView.as_view(), name="contact-detail"),
]
