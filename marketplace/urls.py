from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AnalyticsDashboardView,
    CategoryListView,
    FavoriteListView,
    FavoriteToggleView,
    GlobalSearchView,
    ListingViewSet,
    ProductViewSet,
    ReviewViewSet,
    ShopViewSet,
    WorkerServicesView,
)

# Create the main router
router = DefaultRouter()
router.register(r"listings", ListingViewSet, basename="listing")
router.register(r"shops", ShopViewSet, basename="shop")
router.register(r"products", ProductViewSet, basename="product")
router.register(r"reviews", ReviewViewSet, basename="review")

app_name = "marketplace"

urlpatterns = [
    path("categories/", CategoryListView.as_view(), name="category-list"),
    path("search/", GlobalSearchView.as_view(), name="global-search"),
    path("analytics/", AnalyticsDashboardView.as_view(), name="analytics-dashboard"),
    path("favorites/<str:kind>/", FavoriteListView.as_view(), name="favorite-list"),
    path("favorites/<str:kind>/<uuid:target_id>/", FavoriteToggleView.as_view(), name="favorite-toggle"),
    path("employees/services/", WorkerServicesView.as_view(), name="employee-services"),
    path("", include(router.urls)),
]
