from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.api.serializers import UserSummarySerializer
from accounts.domain.services.profile_service import DEFAULT_BIO
from activity.domain.models import Comment, Post, PostMention

User = get_user_model()


class PostAuthorSerializer(serializers.ModelSerializer):
    bio = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ("id", "name", "image", "bio", "location", "user_type")

    def get_bio(self, obj):
        return obj.bio or DEFAULT_BIO


class PostMentionSerializer(serializers.ModelSerializer):
    class Meta:
        model = PostMention
        fields = ("id", "entity_id", "entity_type", "entity_title", "entity_subtitle", "entity_image", "created_at")


class PostSerializer(serializers.ModelSerializer):
    """Feed card: post, author summary, reactions as user ids, mentions and comment count."""

    user = PostAuthorSerializer(source="author", read_only=True)
    likes = serializers.SerializerMethodField()
    bookmarks = serializers.SerializerMethodField()
    mentions = PostMentionSerializer(many=True, read_only=True)
    comments_count = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = (
            "id",
            "user",
            "content",
            "image_src",
            "media_url",
            "media_type",
            "media_overlay",
            "location",
            "tag",
            "category",
            "post_type",
            "likes",
            "bookmarks",
            "mentions",
            "comments_count",
            "created_at",
        )
        read_only_fields = fields

    def get_likes(self, obj):
        return [str(user.pk) for user in obj.likes.all()]

    def get_bookmarks(self, obj):
        return [str(user.pk) for user in obj.bookmarks.all()]

    def get_comments_count(self, obj):
        if hasattr(obj, "comments_count"):
            return obj.comments_count
        return obj.comments.count()


class MentionInputSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.ChoiceField(choices=["user", "listing", "shop"])
    title = serializers.CharField()
    subtitle = serializers.CharField(required=False, allow_blank=True)
    image = serializers.CharField(required=False, allow_blank=True)


class PostCreateSerializer(serializers.Serializer):
    """Request body for a new post. ``content`` may be empty for media-only posts."""

    content = serializers.CharField(allow_blank=True)
    image_src = serializers.CharField(required=False, allow_blank=True)
    media_url = serializers.CharField(required=False, allow_blank=True)
    media_type = serializers.ChoiceField(choices=["image", "video", "gif"], required=False)
    media_overlay = serializers.JSONField(required=False)
    location = serializers.CharField(required=False, allow_blank=True)
    tag = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    post_type = serializers.CharField(required=False, allow_blank=True)
    mentions = MentionInputSerializer(many=True, required=False)


class CommentSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(source="author", read_only=True)
    post_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Comment
        fields = ("id", "post_id", "content", "user", "created_at")
        read_only_fields = fields


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField()
