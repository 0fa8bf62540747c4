import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    USER_TYPE_CHOICES = [
        ("customer", "Customer"),
        ("individual", "Individual Provider"),
        ("team", "Team"),
    ]

    BILLING_INTERVAL_CHOICES = [
        ("monthly", "Monthly"),
        ("yearly", "Yearly"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    image = models.CharField(max_length=500, blank=True, help_text="Avatar URL on the media CDN")
    bio = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True, help_text='"City, State"')
    user_type = models.CharField(max_length=20, choices=USER_TYPE_CHOICES, default="customer")
    job_title = models.CharField(max_length=120, blank=True)
    interests = models.JSONField(default=list, blank=True)
    gallery_images = models.JSONField(default=list, blank=True)

    following = models.ManyToManyField("self", symmetrical=False, related_name="followers", blank=True)

    # Subscription state. Paid plans are handled by the payment provider's checkout.
    subscription_tier = models.CharField(max_length=50, blank=True)
    is_subscribed = models.BooleanField(default=False)
    subscription_billing_interval = models.CharField(
        max_length=10, choices=BILLING_INTERVAL_CHOICES, blank=True, null=True
    )
    subscription_start_date = models.DateTimeField(null=True, blank=True)
    subscription_end_date = models.DateTimeField(null=True, blank=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "accounts"
        indexes = [
            models.Index(fields=["name"], name="accounts_user_name_idx"),
            models.Index(fields=["user_type"], name="accounts_user_type_idx"),
        ]

    def __str__(self):
        return self.name or self.email

    @property
    def display_name(self) -> str:
        return self.name or "Someone"
