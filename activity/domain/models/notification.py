import uuid

from django.conf import settings
from django.db import models


class Notification(models.Model):
    TYPE_CHOICES = [
        ("NEW_FOLLOWER", "New follower"),
        ("MUTUAL_FOLLOW", "Mutual follow"),
        ("LISTING_FOLLOW", "Listing followed"),
        ("SHOP_FOLLOW", "Shop followed"),
        ("NEW_LIKE", "Post liked"),
        ("NEW_BOOKMARK", "Post bookmarked"),
        ("NEW_COMMENT", "New comment"),
        ("NEW_RESERVATION", "New reservation"),
        ("RESERVATION_ACCEPTED", "Reservation accepted"),
        ("RESERVATION_DECLINED", "Reservation declined"),
        ("RESERVATION_COMPLETED", "Reservation completed"),
        ("RESERVATION_CANCELLED_BY_BUSINESS", "Reservation cancelled by business"),
        ("RESERVATION_CANCELLED_BY_USER", "Reservation cancelled by customer"),
        ("NEW_REVIEW", "New review"),
        ("NEW_MESSAGE", "New message"),
        ("SYSTEM", "System"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    type = models.CharField(max_length=40, choices=TYPE_CHOICES)
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "activity"
        indexes = [
            models.Index(fields=["recipient", "-created_at"], name="activity_notif_recipient_idx"),
            models.Index(fields=["recipient", "is_read"], name="activity_notif_unread_idx"),
        ]

    def __str__(self):
        return f"{self.type} -> {self.recipient_id}"
