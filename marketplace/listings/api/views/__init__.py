from .listing_views import ListingViewSet
from .worker_views import WorkerServicesView

__all__ = ["ListingViewSet", "WorkerServicesView"]
