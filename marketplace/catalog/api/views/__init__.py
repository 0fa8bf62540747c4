from .analytics_views import AnalyticsDashboardView
from .favorite_views import FavoriteListView, FavoriteToggleView
from .review_views import ReviewViewSet
from .search_views import GlobalSearchView

__all__ = ["AnalyticsDashboardView", "FavoriteListView", "FavoriteToggleView", "GlobalSearchView", "ReviewViewSet"]
