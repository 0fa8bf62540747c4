from rest_framework import serializers

from activity.domain.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ("id", "type", "content", "is_read", "created_at")
        read_only_fields = fields
