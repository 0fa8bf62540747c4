from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ("id", "name", "image")


class UserSerializer(serializers.ModelSerializer):
    """The signed-in user's own account."""

    followers_count = serializers.IntegerField(source="followers.count", read_only=True)
    following_count = serializers.IntegerField(source="following.count", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "username",
            "name",
            "image",
            "bio",
            "location",
            "user_type",
            "job_title",
            "interests",
            "gallery_images",
            "followers_count",
            "following_count",
            "subscription_tier",
            "is_subscribed",
            "subscription_billing_interval",
            "subscription_start_date",
            "subscription_end_date",
            "date_joined",
        )
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True)
    bio = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    user_type = serializers.ChoiceField(choices=User.USER_TYPE_CHOICES, required=False)
    job_title = serializers.CharField(max_length=120, required=False, allow_blank=True)
    interests = serializers.ListField(child=serializers.CharField(), required=False)


class GalleryImageSerializer(serializers.Serializer):
    image = serializers.CharField(max_length=500)


class FollowToggleSerializer(serializers.Serializer):
    following = serializers.BooleanField()
    followers_count = serializers.IntegerField()
    target_type = serializers.CharField()
    target_id = serializers.CharField()


class PlanSelectionSerializer(serializers.Serializer):
    plan = serializers.CharField()
    interval = serializers.ChoiceField(choices=User.BILLING_INTERVAL_CHOICES, required=False, allow_null=True)
