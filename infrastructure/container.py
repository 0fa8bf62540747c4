"""
Dependency Injection Container
================================

Simple service locator for infrastructure dependencies and domain services.
Views ask the container for a service instead of constructing it, so tests
can swap implementations in one place.

Usage:
    from infrastructure.container import container

    result = container.listing_service().list_listings(params)
    container.email().send(message)
"""

import logging
from typing import Optional

from .email import EmailFactory, EmailServiceInterface
from .events import EventBus, get_event_bus

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container with lazy initialization and caching of instances.

    Singleton: every ``ServiceContainer()`` call returns the same object.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._email: Optional[EmailServiceInterface] = None
            self._services = {}
            self._initialized = True
            logger.info("Service container initialized")

    def email(self, backend: Optional[str] = None) -> EmailServiceInterface:
        """
        Get email service instance.

        Args:
            backend: 'smtp' or 'mock'. If None, uses configuration from settings.
        """
        if self._email is None or backend is not None:
            self._email = EmailFactory.create(backend)
            logger.debug(f"Created email service: {type(self._email).__name__}")

        return self._email

    def event_bus(self) -> EventBus:
        """The process-wide event bus. Not cached here so listeners registered at startup keep working."""
        return get_event_bus()

    def _get(self, name: str, build):
        if name not in self._services:
            self._services[name] = build()
            logger.debug(f"Created {name}")
        return self._services[name]

    # Accounts

    def follow_service(self):
        from accounts.domain.services import FollowService

        return self._get("FollowService", lambda: FollowService(event_bus=self.event_bus()))

    def profile_service(self):
        from accounts.domain.services import ProfileService

        return self._get("ProfileService", ProfileService)

    def subscription_service(self):
        from accounts.domain.services import SubscriptionService

        return self._get("SubscriptionService", SubscriptionService)

    # Marketplace

    def listing_service(self):
        from marketplace.services import ListingService

        return self._get("ListingService", ListingService)

    def worker_service(self):
        from marketplace.services import IndependentWorkerService

        return self._get("IndependentWorkerService", IndependentWorkerService)

    def shop_service(self):
        from marketplace.services import ShopService

        return self._get("ShopService", ShopService)

    def product_service(self):
        from marketplace.services import ProductService

        return self._get("ProductService", ProductService)

    def favorite_service(self):
        from marketplace.services import FavoriteService

        return self._get("FavoriteService", FavoriteService)

    def review_service(self):
        from marketplace.services import ReviewService

        return self._get("ReviewService", lambda: ReviewService(event_bus=self.event_bus()))

    def search_service(self):
        from marketplace.services import SearchService

        return self._get("SearchService", SearchService)

    def analytics_service(self):
        from marketplace.services import AnalyticsService

        return self._get("AnalyticsService", AnalyticsService)

    # Bookings

    def reservation_service(self):
        from bookings.domain.services import ReservationService

        return self._get("ReservationService", lambda: ReservationService(event_bus=self.event_bus()))

    # Activity

    def feed_service(self):
        from activity.domain.services import FeedService

        return self._get("FeedService", lambda: FeedService(event_bus=self.event_bus()))

    def comment_service(self):
        from activity.domain.services import CommentService

        return self._get("CommentService", lambda: CommentService(event_bus=self.event_bus()))

    def notification_service(self):
        from activity.domain.services import NotificationService

        return self._get("NotificationService", NotificationService)

    # Chat

    def chat_service(self):
        from chat.domain.services import ChatService

        return self._get("ChatService", lambda: ChatService(event_bus=self.event_bus()))

    # Waitlist

    def waitlist_service(self):
        from waitlist.domain.services import WaitlistService

        return self._get("WaitlistService", WaitlistService)

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._email = None
        self._services = {}
        logger.info("Service container reset")

    def configure_for_testing(self):
        """Reset and install the mock email backend."""
        self.reset()
        self._email = EmailFactory.create("mock")
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()


def get_email() -> EmailServiceInterface:
    """Get email service from global container."""
    return container.email()
