import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class Review(models.Model):
    """A 1-5 star review of a provider (user) or of a listing."""

    TARGET_TYPE_CHOICES = [
        ("user", "User"),
        ("listing", "Listing"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews_written")
    target_type = models.CharField(max_length=10, choices=TARGET_TYPE_CHOICES)
    target_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="reviews_received",
    )
    target_listing = models.ForeignKey(
        "marketplace.Listing", on_delete=models.CASCADE, null=True, blank=True, related_name="reviews"
    )

    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    helpful_votes = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="helpful_reviews", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        constraints = [
            models.UniqueConstraint(
                fields=["author", "target_user"],
                condition=Q(target_user__isnull=False),
                name="unique_review_per_user_target",
            ),
            models.UniqueConstraint(
                fields=["author", "target_listing"],
                condition=Q(target_listing__isnull=False),
                name="unique_review_per_listing_target",
            ),
        ]
        indexes = [
            models.Index(fields=["target_user", "-created_at"], name="mkt_review_user_created_idx"),
            models.Index(fields=["target_listing", "-created_at"], name="mkt_review_listing_created_idx"),
        ]

    def __str__(self):
        return f"{self.rating}/5 by {self.author_id}"

    @property
    def target_id(self):
        return self.target_user_id if self.target_type == "user" else self.target_listing_id
