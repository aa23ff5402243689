from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import Notification

User = get_user_model()


class NotificationSerializer(serializers.ModelSerializer):
    user = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )
    message = serializers.CharField(max_length=1000, trim_whitespace=True)

    class Meta:
        model = Notification
        fields = ["id", "user", "type", "message", "read_at", "created_at"]
        read_only_fields = ["id", "read_at", "created_at"]
