"""Profiles API views.

Provides the user account endpoints:
- GET `/api/users/` lists accounts (staff only, paginated, `search`).
- GET/PATCH/DELETE `/api/users/{user_id}/` for the owner or staff.

A missing profile is created lazily for an existing user, so accounts made
outside the registration flow (e.g. `createsuperuser`) are still served.
"""

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.pagination import StandardPagination
from ..models import Profile
from .permissions import IsAdminStaff, IsOwnerOrAdmin
from .serializers import UserDetailSerializer, UserPatchSerializer

User = get_user_model()


class UserListView(generics.ListAPIView):
    """GET: paginated list of accounts for staff, optional `search`."""

    serializer_class = UserDetailSerializer
    permission_classes = [IsAuthenticated, IsAdminStaff]
    pagination_class = StandardPagination

    def get_queryset(self):
        qs = Profile.objects.select_related("user").order_by("-user__date_joined", "-id")
        search = self.request.query_params.get("search")
        if search:
            qs = qs.filter(
                Q(user__username__icontains=search)
                | Q(user__email__icontains=search)
                | Q(user__first_name__icontains=search)
                | Q(user__last_name__icontains=search)
            )
        return qs


class UserDetailView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single account; owner or staff."""

    queryset = Profile.objects.select_related("user")
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    parser_classes = (JSONParser, FormParser, MultiPartParser)
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def get_serializer_class(self):
        """Use the patch serializer for PATCH; the detail serializer otherwise."""
        if self.request.method == "PATCH":
            return UserPatchSerializer
        return UserDetailSerializer

    def get_object(self):
        """Return the profile of the addressed user, creating it if absent."""
        user = get_object_or_404(User, pk=self.kwargs["user_id"])
        obj, _ = Profile.objects.get_or_create(user=user)
        self.check_object_permissions(self.request, obj)
        return obj

    def partial_update(self, request, *args, **kwargs):
        """Apply a partial update and return the full account."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(UserDetailSerializer(instance).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        """Delete the user account (profile and token cascade)."""
        instance = self.get_object()
        instance.user.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
