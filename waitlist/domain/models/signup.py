import uuid

from django.db import models


class WaitlistEntry(models.Model):
    """
    Pre-launch email capture. Emails are stored lower-cased and unique;
    signing up again reactivates the entry instead of duplicating it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    source = models.CharField(max_length=50, default="coming_soon", help_text="Page or campaign the signup came from")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Waitlist Entry"
        verbose_name_plural = "Waitlist Entries"
        ordering = ["-created_at"]
        app_label = "waitlist"

    def __str__(self):
        return f"{self.email} ({self.source})"


class DemoRequest(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    source = models.CharField(max_length=50, default="demo_request")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Demo Request"
        verbose_name_plural = "Demo Requests"
        ordering = ["-created_at"]
        app_label = "waitlist"

    def __str__(self):
        return f"{self.name} <{self.email}>"
