from django.contrib.auth import get_user_model
from rest_framework import serializers

from bookings.models import MAX_PARTY_SIZE, Booking
from common.permissions import is_staff

User = get_user_model()


class BookingSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Booking
        fields = ["id", "user_id", "number_of_people", "booked_at", "status", "created_at", "updated_at"]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """`user_id` is honoured for staff only; guests book for themselves."""

    user_id = serializers.IntegerField(required=False)
    number_of_people = serializers.IntegerField(min_value=1, max_value=MAX_PARTY_SIZE, default=1)
    booked_at = serializers.DateTimeField()

    def validate_user_id(self, value):
        user = getattr(self.context.get("request"), "user", None)
        if not is_staff(user) and (user is None or value != user.id):
            raise serializers.ValidationError("You can only book for yourself.")
        if not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("User not found.")
        return value


class BookingUpdateSerializer(serializers.Serializer):
    number_of_people = serializers.IntegerField(min_value=1, max_value=MAX_PARTY_SIZE, required=False)
    booked_at = serializers.DateTimeField(required=False)
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)

    def to_internal_value(self, data):
        if hasattr(data, "get") and isinstance(data.get("status"), str):
            data = data.copy()
            data["status"] = data["status"].strip().upper()
        return super().to_internal_value(data)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one field to update.")
        return attrs
