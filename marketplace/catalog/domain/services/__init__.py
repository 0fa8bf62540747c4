from .analytics_service import AnalyticsService
from .favorite_service import FavoriteService
from .review_service import ReviewService
from .search_service import SearchService

__all__ = ["AnalyticsService", "FavoriteService", "ReviewService", "SearchService"]
