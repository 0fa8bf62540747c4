import uuid

from django.conf import settings
from django.db import models


class Reservation(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("accepted", "Accepted"),
        ("declined", "Declined"),
        ("completed", "Completed"),
        ("cancelled", "Cancelled"),
    ]

    PAYMENT_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
        ("refunded", "Refunded"),
    ]

    # Owner of the listing moves the booking along these edges
    ALLOWED_TRANSITIONS = {
        "pending": {"accepted", "declined"},
        "accepted": {"completed"},
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reservations")
    listing = models.ForeignKey("marketplace.Listing", on_delete=models.CASCADE, related_name="reservations")
    service = models.ForeignKey(
        "marketplace.Service", on_delete=models.SET_NULL, null=True, blank=True, related_name="reservations"
    )
    employee = models.ForeignKey(
        "marketplace.Employee", on_delete=models.SET_NULL, null=True, blank=True, related_name="reservations"
    )

    date = models.DateTimeField()
    time = models.CharField(max_length=20, help_text="Display slot, e.g. 10:30 AM")
    note = models.TextField(blank=True)

    # Snapshot of the booked service at reservation time
    service_name = models.CharField(max_length=200)
    total_price = models.PositiveIntegerField()

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "bookings"
        indexes = [
            models.Index(fields=["customer", "-created_at"], name="bookings_customer_created_idx"),
            models.Index(fields=["listing", "-created_at"], name="bookings_listing_created_idx"),
            models.Index(fields=["listing", "status"], name="bookings_listing_status_idx"),
        ]

    def __str__(self):
        return f"{self.service_name} on {self.date:%Y-%m-%d} ({self.status})"

    def can_transition_to(self, status: str) -> bool:
        return status in self.ALLOWED_TRANSITIONS.get(self.status, set())
