"""Profiles API serializers.

Contains serializers for:
- reading a user account (user fields merged with its profile),
- partially updating an account (owner or staff),
- the compact representation used in staff listings.

String fields never return `null` in responses, but empty strings instead.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from common.uploads import FileOrURLField, resolve_image
from ..models import Profile

User = get_user_model()


# ------------------------------ helpers ------------------------------

def _apply_user_updates(user, data: dict):
    for attr, val in data.items():
        setattr(user, attr, val if val is not None else "")
    if data:
        user.save(update_fields=list(data.keys()))


def _coalesce_fields(data: dict, keys: set):
    for k in keys:
        if data.get(k) is None:
            data[k] = ""


# ------------------------------ serializers ------------------------------

class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only account representation (coalesces string fields to '')."""

    id = serializers.IntegerField(source="user.id", read_only=True)
    username = serializers.CharField(source="user.username", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    first_name = serializers.CharField(source="user.first_name", read_only=True)
    last_name = serializers.CharField(source="user.last_name", read_only=True)
    is_staff = serializers.BooleanField(source="user.is_staff", read_only=True)
    date_joined = serializers.DateTimeField(source="user.date_joined", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "phone_number",
            "address",
            "image",
            "email_verified",
            "is_staff",
            "date_joined",
        ]
        read_only_fields = fields

    _no_null = {"first_name", "last_name", "phone_number", "address", "image"}

    def to_representation(self, instance: Profile):
        data = super().to_representation(instance)
        _coalesce_fields(data, self._no_null)
        return data


class UserPatchSerializer(serializers.ModelSerializer):
    """
    Partial update of an account.
    `image` is the single API key for avatar URL OR multipart upload.
    Only staff may change `is_staff`.
    """

    image = FileOrURLField(required=False)
    first_name = serializers.CharField(
        source="user.first_name", required=False, allow_blank=True, allow_null=True
    )
    last_name = serializers.CharField(
        source="user.last_name", required=False, allow_blank=True, allow_null=True
    )
    email = serializers.EmailField(
        source="user.email", required=False, allow_blank=True, allow_null=True
    )
    is_staff = serializers.BooleanField(source="user.is_staff", required=False)

    class Meta:
        model = Profile
        fields = [
            "first_name",
            "last_name",
            "email",
            "phone_number",
            "address",
            "image",
            "is_staff",
        ]
        extra_kwargs = {
            "phone_number": {"required": False, "allow_blank": True, "allow_null": True},
            "address": {"required": False, "allow_blank": True, "allow_null": True},
        }

    def validate_is_staff(self, value):
        request = self.context.get("request")
        if not (request and request.user.is_staff):
            raise serializers.ValidationError("Only staff may change staff status.")
        return value

    def validate_email(self, value):
        if not value:
            return value
        user = self.instance.user if self.instance else None
        taken = User.objects.filter(email__iexact=value)
        if user is not None:
            taken = taken.exclude(pk=user.pk)
        if taken.exists():
            raise serializers.ValidationError("Email already in use.")
        return value

    def update(self, instance: Profile, validated_data):
        """Handle nested user fields, avatar upload/string, and normalize None -> ''."""
        request = self.context.get("request")
        _apply_user_updates(instance.user, validated_data.pop("user", {}))

        if "image" in validated_data:
            instance.image = resolve_image(request, validated_data.pop("image"), "users")

        for attr, val in validated_data.items():
            setattr(instance, attr, val if val is not None else "")
        instance.save()
        return instance
