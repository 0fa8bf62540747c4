import uuid

from django.conf import settings
from django.db import models


class Post(models.Model):
    MEDIA_TYPE_CHOICES = [
        ("image", "Image"),
        ("video", "Video"),
        ("gif", "GIF"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="posts")

    content = models.TextField(blank=True)
    image_src = models.CharField(max_length=500, blank=True)
    media_url = models.CharField(max_length=500, blank=True)
    media_type = models.CharField(max_length=10, choices=MEDIA_TYPE_CHOICES, blank=True)
    media_overlay = models.JSONField(null=True, blank=True, help_text="Text overlay drawn over the media")

    location = models.CharField(max_length=200, blank=True)
    tag = models.CharField(max_length=100, blank=True)
    category = models.CharField(max_length=100, blank=True)
    post_type = models.CharField(max_length=30, blank=True)

    likes = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="liked_posts", blank=True)
    bookmarks = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="bookmarked_posts", blank=True)
    hidden_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="hidden_posts", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "activity"
        indexes = [
            models.Index(fields=["author", "-created_at"], name="activity_post_author_idx"),
            models.Index(fields=["category", "-created_at"], name="activity_post_category_idx"),
            models.Index(fields=["-created_at"], name="activity_post_created_idx"),
        ]

    def __str__(self):
        return (self.content or "Post")[:50]


class PostMention(models.Model):
    """Snapshot of a user, listing or shop tagged in a post."""

    ENTITY_TYPE_CHOICES = [
        ("user", "User"),
        ("listing", "Listing"),
        ("shop", "Shop"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="mentions")
    entity_id = models.CharField(max_length=64)
    entity_type = models.CharField(max_length=10, choices=ENTITY_TYPE_CHOICES)
    entity_title = models.CharField(max_length=200)
    entity_subtitle = models.CharField(max_length=200, blank=True)
    entity_image = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "activity"
        indexes = [models.Index(fields=["entity_type", "entity_id"], name="activity_mention_entity_idx")]

    def __str__(self):
        return f"@{self.entity_title} ({self.entity_type})"


class Comment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="comments")
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "activity"

    def __str__(self):
        return f"Comment by {self.author_id} on {self.post_id}"
