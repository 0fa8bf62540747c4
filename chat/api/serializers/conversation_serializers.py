from rest_framework import serializers

from accounts.api.serializers import UserSummarySerializer
from chat.domain.models import Message


class MessageSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)
    conversation_id = serializers.UUIDField(read_only=True)
    seen_by = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ("id", "conversation_id", "sender", "body", "image", "seen_by", "created_at")
        read_only_fields = fields

    def get_seen_by(self, obj):
        return [str(user.pk) for user in obj.seen_by.all()]


class LastMessageSerializer(serializers.Serializer):
    content = serializers.CharField()
    created_at = serializers.DateTimeField()


class ConversationSummarySerializer(serializers.Serializer):
    """Shape of one inbox row. Documentation only."""

    id = serializers.UUIDField()
    other_user = UserSummarySerializer(allow_null=True)
    last_message = LastMessageSerializer(allow_null=True)
    unread_count = serializers.IntegerField()
    last_message_at = serializers.DateTimeField()


class StartConversationSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


class SendMessageSerializer(serializers.Serializer):
    body = serializers.CharField(required=False, allow_blank=True)
    image = serializers.CharField(required=False, allow_blank=True, max_length=500)
