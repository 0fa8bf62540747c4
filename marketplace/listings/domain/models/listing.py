import uuid

from django.conf import settings
from django.db import models


class Listing(models.Model):
    """A business or service profile that offers bookable services."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="listings")

    title = models.CharField(max_length=200)
    description = models.TextField()
    image_src = models.CharField(max_length=500)
    category = models.CharField(max_length=100)
    gallery_images = models.JSONField(default=list, blank=True)

    # Location, stored as "City, State"
    location = models.CharField(max_length=200, blank=True)
    address = models.CharField(max_length=255, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)

    phone_number = models.CharField(max_length=40, blank=True)
    website = models.CharField(max_length=255, blank=True)

    followers = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="followed_listings", blank=True)
    favorited_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="favorite_listings", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["owner", "-created_at"], name="mkt_listing_owner_created_idx"),
            models.Index(fields=["category"], name="mkt_listing_category_idx"),
            models.Index(fields=["location"], name="mkt_listing_location_idx"),
        ]

    def __str__(self):
        return self.title


class Service(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    listing = models.ForeignKey(Listing, on_delete=models.CASCADE, related_name="services")
    service_name = models.CharField(max_length=200)
    price = models.PositiveIntegerField(help_text="Whole currency units")
    category = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.service_name} ({self.listing_id})"


class Employee(models.Model):
    """Links a user to the listing they work for."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    listing = models.ForeignKey(Listing, on_delete=models.CASCADE, related_name="employees")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="employments")
    full_name = models.CharField(max_length=150)
    job_title = models.CharField(max_length=120, blank=True)
    services = models.ManyToManyField(Service, related_name="employees", blank=True)
    is_active = models.BooleanField(default=True)
    is_independent = models.BooleanField(default=False, help_text="Solo worker who runs this listing alone")
    favorited_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="favorite_employees", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "marketplace"
        constraints = [
            models.UniqueConstraint(fields=["listing", "user"], name="unique_employee_per_listing"),
        ]

    def __str__(self):
        return self.full_name


class StoreHour(models.Model):
    DAY_CHOICES = [
        ("Monday", "Monday"),
        ("Tuesday", "Tuesday"),
        ("Wednesday", "Wednesday"),
        ("Thursday", "Thursday"),
        ("Friday", "Friday"),
        ("Saturday", "Saturday"),
        ("Sunday", "Sunday"),
    ]

    listing = models.ForeignKey(Listing, on_delete=models.CASCADE, related_name="store_hours")
    day_of_week = models.CharField(max_length=10, choices=DAY_CHOICES)
    open_time = models.CharField(max_length=10, blank=True, help_text="HH:MM")
    close_time = models.CharField(max_length=10, blank=True, help_text="HH:MM")
    is_closed = models.BooleanField(default=False)

    class Meta:
        ordering = ["id"]
        app_label = "marketplace"

    def __str__(self):
        if self.is_closed:
            return f"{self.day_of_week}: closed"
        return f"{self.day_of_week}: {self.open_time}-{self.close_time}"
