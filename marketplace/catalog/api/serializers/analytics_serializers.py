from rest_framework import serializers

from .review_serializers import RatingBucketSerializer


class OverviewSerializer(serializers.Serializer):
    total_listings = serializers.IntegerField()
    total_reservations = serializers.IntegerField()
    total_revenue = serializers.IntegerField()
    total_posts = serializers.IntegerField()
    total_followers = serializers.IntegerField()
    total_following = serializers.IntegerField()


class ReviewStatsSerializer(serializers.Serializer):
    total_reviews = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = RatingBucketSerializer(many=True)


class RecentReservationSerializer(serializers.Serializer):
    id = serializers.CharField()
    service_name = serializers.CharField()
    date = serializers.CharField(help_text="ISO 8601")
    total_price = serializers.IntegerField()
    status = serializers.CharField()
    user = serializers.DictField()
    listing = serializers.DictField()


class RecentPostSerializer(serializers.Serializer):
    id = serializers.CharField()
    content = serializers.CharField()
    created_at = serializers.CharField(help_text="ISO 8601")
    likes = serializers.IntegerField()
    comments = serializers.IntegerField()


class RecentActivitySerializer(serializers.Serializer):
    reservations = RecentReservationSerializer(many=True)
    posts = RecentPostSerializer(many=True)


class MonthlyDataSerializer(serializers.Serializer):
    month = serializers.CharField(help_text='e.g. "Mar 2025"')
    reservations = serializers.IntegerField()
    revenue = serializers.IntegerField()
    posts = serializers.IntegerField()


class TopServiceSerializer(serializers.Serializer):
    service_name = serializers.CharField()
    category = serializers.CharField()
    bookings = serializers.IntegerField()
    revenue = serializers.IntegerField()


class ListingStatsSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    category = serializers.CharField()
    reservations = serializers.IntegerField()
    revenue = serializers.IntegerField()
    created_at = serializers.CharField()


class AnalyticsDashboardSerializer(serializers.Serializer):
    """Provider dashboard. Documentation only; the service builds the payload."""

    overview = OverviewSerializer()
    reviews = ReviewStatsSerializer()
    recent_activity = RecentActivitySerializer()
    monthly_data = MonthlyDataSerializer(many=True)
    top_services = TopServiceSerializer(many=True)
    listings = ListingStatsSerializer(many=True)
