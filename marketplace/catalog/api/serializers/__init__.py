from .analytics_serializers import AnalyticsDashboardSerializer
from .favorite_serializers import FavoriteToggleSerializer
from .review_serializers import ReviewCreateSerializer, ReviewListResponseSerializer, ReviewSerializer
from .search_serializers import SearchResponseSerializer, SearchResultSerializer

__all__ = [
    "AnalyticsDashboardSerializer",
    "FavoriteToggleSerializer",
    "ReviewCreateSerializer",
    "ReviewListResponseSerializer",
    "ReviewSerializer",
    "SearchResponseSerializer",
    "SearchResultSerializer",
]
