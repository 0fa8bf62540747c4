from .listing_service import ListingService
from .worker_service import IndependentWorkerService

__all__ = ["IndependentWorkerService", "ListingService"]
