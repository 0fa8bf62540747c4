from rest_framework import serializers

from accounts.api.serializers import UserSummarySerializer
from marketplace.catalog.domain.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)
    target_id = serializers.SerializerMethodField()
    helpful_count = serializers.SerializerMethodField()
    is_verified_booking = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = (
            "id",
            "author",
            "target_type",
            "target_id",
            "rating",
            "comment",
            "helpful_count",
            "is_verified_booking",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_target_id(self, obj):
        return str(obj.target_id) if obj.target_id else None

    def get_helpful_count(self, obj):
        return len(obj.helpful_votes.all())

    def get_is_verified_booking(self, obj):
        if "is_verified_booking" in self.context:
            return self.context["is_verified_booking"]
        return getattr(obj, "is_verified_booking", False)


class ReviewCreateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True)
    target_type = serializers.ChoiceField(choices=Review.TARGET_TYPE_CHOICES)
    target_user_id = serializers.UUIDField(required=False)
    target_listing_id = serializers.UUIDField(required=False)


class RatingBucketSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    count = serializers.IntegerField()


class ReviewListResponseSerializer(serializers.Serializer):
    reviews = ReviewSerializer(many=True)
    total_count = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = RatingBucketSerializer(many=True)
