import uuid

from django.conf import settings
from django.db import models


class Conversation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    participants = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="conversations")
    created_at = models.DateTimeField(auto_now_add=True)
    last_message_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-last_message_at"]
        app_label = "chat"
        indexes = [
            models.Index(fields=["-last_message_at"], name="chat_conversation_recent_idx"),
        ]

    def __str__(self):
        return f"Conversation {self.id}"


class Message(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages")

    body = models.TextField(blank=True)
    image = models.CharField(max_length=500, blank=True, help_text="Image URL on the media CDN")

    seen_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="seen_messages", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "chat"
        indexes = [
            models.Index(fields=["conversation", "created_at"], name="chat_message_conv_created_idx"),
        ]

    def __str__(self):
        return f"Message {self.id} from {self.sender_id}"
