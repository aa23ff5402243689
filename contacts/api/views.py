"""Contacts API views.

POST is public and rate limited (`contact` throttle scope). Staff list the
messages (filter by name/email, ordering by created_at, name or email) and
delete them.
"""

from rest_framework import generics
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.throttling import ScopedRateThrottle

from contacts.models import Contact
from common.pagination import StandardPagination
from .permissions import AnyoneCanWriteStaffCanRead, IsAdminStaff
from .serializers import ContactSerializer

ORDERING = {"created_at", "-created_at", "name", "-name", "email", "-email"}


class ContactListCreateAPIView(generics.ListCreateAPIView):
    """GET: staff inbox (paginated). POST: public contact form."""

    serializer_class = ContactSerializer
    permission_classes = [AnyoneCanWriteStaffCanRead]
    pagination_class = StandardPagination
    throttle_scope = "contact"

    def get_throttles(self):
        # Only the public form is rate limited.
        if self.request.method == "POST":
            return [ScopedRateThrottle()]
        return []

    def get_queryset(self):
        qs = Contact.objects.all()
        params = self.request.query_params

        name = params.get("name")
        if name:
            qs = qs.filter(name__icontains=name.strip())
        email = params.get("email")
        if email:
            qs = qs.filter(email__iexact=email.strip())

        ordering = params.get("ordering")
        if ordering:
            if ordering not in ORDERING:
                raise ValidationError({"ordering": f"Allowed values: {', '.join(sorted(ORDERING))}."})
            return qs.order_by(ordering, "id")
        return qs.order_by("-created_at", "id")


class ContactDetailAPIView(generics.DestroyAPIView):
    """DELETE: soft delete a message (staff)."""

    queryset = Contact.objects.all()
    serializer_class = ContactSerializer
    permission_classes = [IsAuthenticated, IsAdminStaff]
