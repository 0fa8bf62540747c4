from marketplace.catalog.api.views import (
    AnalyticsDashboardView,
    FavoriteListView,
    FavoriteToggleView,
    GlobalSearchView,
    ReviewViewSet,
)
from marketplace.listings.api.views import ListingViewSet, WorkerServicesView
from marketplace.shops.api.views import CategoryListView, ProductViewSet, ShopViewSet


__all__ = [
    "AnalyticsDashboardView",
    "CategoryListView",
    "FavoriteListView",
    "FavoriteToggleView",
    "GlobalSearchView",
    "ListingViewSet",
    "ProductViewSet",
    "ReviewViewSet",
    "ShopViewSet",
    "WorkerServicesView",
]
